# ============================================================================
# CONTROL PLANE API CLIENT
# ============================================================================
# STATUS: Infrastructure - Async HTTP client for the control plane public API
# PURPOSE: SelfCheck and Version RPCs consumed by preflight checks
# ============================================================================
"""
Control Plane API Client

Async httpx client for the control plane public API. Each RPC is a POST of a
JSON request body to ``<base>/<Method>``; the response body is parsed into
the pydantic models in core.models.selfcheck.

Two ways to reach the API:
- from_address(): direct network address (in-cluster, port-forward)
- from_kubernetes(): through the Kubernetes API server service proxy,
  reusing the kubeconfig credentials
"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.config.defaults import ControlPlaneDefaults
from core.errors import (
    CheckTimeoutError,
    ClientInitError,
    ClusterConnectionError,
    RemoteCallError,
)
from core.logging import ComponentType, get_logger
from core.models.selfcheck import SelfCheckResponse, VersionResponse

logger = get_logger(__name__, ComponentType.CONTROL_PLANE)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ControlPlaneClient:
    """Client for the control plane public API."""

    def __init__(
        self,
        base_url: str,
        namespace: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.namespace = namespace
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_address(
        cls,
        namespace: str,
        addr: str,
        defaults: Optional[ControlPlaneDefaults] = None,
    ) -> "ControlPlaneClient":
        """
        Client for a directly reachable API address ("host:port").

        Raises:
            ClientInitError: If the address is empty or malformed.
        """
        defaults = defaults or ControlPlaneDefaults()
        if not addr or "/" in addr:
            raise ClientInitError(f"invalid control plane API address [{addr}]")

        base_url = f"http://{addr}/{defaults.api_prefix}"
        try:
            httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ClientInitError(f"invalid control plane API address [{addr}]: {e}") from e

        logger.debug(f"Control plane client for {base_url}")
        return cls(base_url, namespace, timeout=defaults.rpc_timeout_seconds)

    @classmethod
    def from_kubernetes(
        cls,
        namespace: str,
        kube_api,
        defaults: Optional[ControlPlaneDefaults] = None,
    ) -> "ControlPlaneClient":
        """
        Client that reaches the API through the Kubernetes service proxy.

        Raises:
            ClientInitError: If the proxy URL or transport cannot be built.
        """
        defaults = defaults or ControlPlaneDefaults()
        try:
            proxy_url = kube_api.url_for(
                namespace,
                f"/services/{defaults.controller_service}:{defaults.controller_port_name}/proxy/",
            )
        except ValueError as e:
            raise ClientInitError(f"error building control plane proxy URL: {e}") from e

        http_client = kube_api.new_client()
        base_url = proxy_url + defaults.api_prefix
        logger.debug(f"Control plane client via Kubernetes proxy {base_url}")
        return cls(
            base_url,
            namespace,
            http_client=http_client,
            timeout=defaults.rpc_timeout_seconds,
        )

    async def _post(
        self,
        method: str,
        model: Type[ModelT],
        body: Optional[Dict[str, Any]] = None,
    ) -> ModelT:
        url = self.base_url + method
        try:
            response = await self._client.post(url, json=body or {}, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise CheckTimeoutError(f"{method} request", self.timeout) from e
        except httpx.TransportError as e:
            raise ClusterConnectionError(
                f"cannot reach the control plane API at {url}: {e}", url=url
            ) from e

        if response.status_code != 200:
            raise RemoteCallError(
                f"Unexpected control plane API response to {method}: "
                f"{response.status_code} {response.reason_phrase}".rstrip(),
                method=method,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RemoteCallError(
                f"invalid {method} response from the control plane API: {e}",
                method=method,
            ) from e

    async def self_check(self) -> SelfCheckResponse:
        """Run the control plane's own diagnostics."""
        return await self._post("SelfCheck", SelfCheckResponse)

    async def version(self) -> VersionResponse:
        """Fetch the control plane build information."""
        return await self._post("Version", VersionResponse)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["ControlPlaneClient"]
