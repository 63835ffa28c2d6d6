# ============================================================================
# CONTROL PLANE CLIENT TESTS
# ============================================================================
# STATUS: Tests - Control plane public API client
# PURPOSE: Verify SelfCheck / Version parsing, URL building, error mapping
# ============================================================================
"""
Control Plane Client Tests

Run with:
    pytest tests/test_control_plane.py -v
"""

import asyncio
import json
import pytest
import httpx
from unittest.mock import MagicMock

from core.config.defaults import ControlPlaneDefaults
from core.errors import (
    CheckTimeoutError,
    ClientInitError,
    ClusterConnectionError,
    RemoteCallError,
)
from core.models import CheckStatus, SelfCheckResponse
from infrastructure.control_plane import ControlPlaneClient
from infrastructure.kubernetes import KubeConfig, KubernetesAPI


# ============================================================================
# HELPERS
# ============================================================================

SELF_CHECK_BODY = {
    "results": [
        {
            "subsystem_name": "kubernetes-api",
            "check_description": "can query the Kubernetes API",
            "status": "OK",
            "friendly_message_to_user": "",
        },
        {
            "subsystem_name": "prometheus",
            "check_description": "can query Prometheus",
            "status": "ERROR",
            "friendly_message_to_user": "prometheus is unreachable",
        },
    ]
}


def _client(handler, base_url="http://ctrl:8085/api/v1/", timeout=5.0):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ControlPlaneClient(base_url, "linkerd", http_client=http_client, timeout=timeout)


def _run(client, method):
    async def go():
        try:
            return await getattr(client, method)()
        finally:
            await client.close()
    return asyncio.run(go())


# ============================================================================
# SELF CHECK
# ============================================================================

class TestSelfCheck:

    def test_parses_results_in_order(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=SELF_CHECK_BODY)

        response = _run(_client(handler), "self_check")

        assert seen == {"method": "POST", "url": "http://ctrl:8085/api/v1/SelfCheck", "body": {}}
        assert [r.subsystem_name for r in response.results] == ["kubernetes-api", "prometheus"]
        assert response.results[1].status is CheckStatus.ERROR

    def test_sub_results(self):
        response = SelfCheckResponse.model_validate(SELF_CHECK_BODY)
        subs = response.sub_results()

        assert subs[0].ok is True
        assert subs[0].description == "can query the Kubernetes API"
        assert subs[1].ok is False
        assert subs[1].failure_message == "prometheus is unreachable"

    def test_fail_and_error_both_not_ok(self):
        assert CheckStatus.OK.is_ok()
        assert not CheckStatus.FAIL.is_ok()
        assert not CheckStatus.ERROR.is_ok()

    def test_empty_results(self):
        response = _run(_client(lambda r: httpx.Response(200, json={})), "self_check")
        assert response.sub_results() == []

    def test_non_200(self):
        with pytest.raises(RemoteCallError) as exc_info:
            _run(_client(lambda r: httpx.Response(500)), "self_check")
        assert exc_info.value.method == "SelfCheck"
        assert "500" in str(exc_info.value)

    def test_malformed_body(self):
        with pytest.raises(RemoteCallError, match="invalid SelfCheck response"):
            _run(_client(lambda r: httpx.Response(200, json={"results": [{"status": "OK"}]})), "self_check")

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        with pytest.raises(CheckTimeoutError):
            _run(_client(handler), "self_check")

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ClusterConnectionError):
            _run(_client(handler), "self_check")


class TestVersion:

    def test_release_version(self):
        def handler(request):
            assert request.url.path == "/api/v1/Version"
            return httpx.Response(200, json={"release_version": "stable-2.4.1", "go_version": "go1.22"})

        response = _run(_client(handler), "version")
        assert response.release_version == "stable-2.4.1"


# ============================================================================
# CONSTRUCTION
# ============================================================================

class TestConstruction:

    def test_from_address(self):
        client = ControlPlaneClient.from_address("linkerd", "localhost:8085")
        try:
            assert client.base_url == "http://localhost:8085/api/v1/"
            assert client.namespace == "linkerd"
            assert client.timeout == 5.0
        finally:
            asyncio.run(client.close())

    @pytest.mark.parametrize("addr", ["", "http://localhost:8085", "host:port:extra:/x"])
    def test_from_address_rejects_bad_input(self, addr):
        with pytest.raises(ClientInitError):
            ControlPlaneClient.from_address("linkerd", addr)

    def test_from_kubernetes_uses_proxy_url(self):
        api = KubernetesAPI(KubeConfig(server="https://cluster:6443"))
        client = ControlPlaneClient.from_kubernetes("linkerd", api)
        try:
            assert client.base_url == (
                "https://cluster:6443/api/v1/namespaces/linkerd/"
                "services/linkerd-controller-api:http/proxy/api/v1/"
            )
        finally:
            asyncio.run(client.close())

    def test_from_kubernetes_custom_service(self):
        api = MagicMock()
        api.url_for.return_value = "https://c/api/v1/namespaces/mesh/services/ctl:http/proxy/"
        defaults = ControlPlaneDefaults(controller_service="ctl", rpc_timeout_seconds=2.0)

        client = ControlPlaneClient.from_kubernetes("mesh", api, defaults)

        api.url_for.assert_called_once_with("mesh", "/services/ctl:http/proxy/")
        assert client.base_url.endswith("/proxy/api/v1/")
        assert client.timeout == 2.0
        assert client._client is api.new_client.return_value
