# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# STATUS: Tests - Defaults and environment overrides
# PURPOSE: Verify env var parsing and the cached defaults instance
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import os
import pytest

from core.config.defaults import (
    DEFAULT_MIN_KUBERNETES_VERSION,
    ControlPlaneDefaults,
    Defaults,
    KubernetesDefaults,
    get_defaults,
    reset_defaults,
)
from core.errors import VersionParseError
from core.versioning import VersionTriple


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "KUBECONFIG",
        "MESHCHECK_NAMESPACE",
        "MESHCHECK_KUBE_TIMEOUT_SECONDS",
        "MESHCHECK_MIN_KUBERNETES_VERSION",
        "MESHCHECK_API_ADDR",
        "MESHCHECK_RPC_TIMEOUT_SECONDS",
        "MESHCHECK_CONTROLLER_SERVICE",
        "MESHCHECK_CONTROLLER_PORT_NAME",
        "MESHCHECK_API_PREFIX",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_defaults()
    yield
    reset_defaults()


class TestKubernetesDefaults:

    def test_builtin_values(self):
        defaults = KubernetesDefaults.from_env()
        assert defaults.kubeconfig_path is None
        assert defaults.namespace == "linkerd"
        assert defaults.min_version == DEFAULT_MIN_KUBERNETES_VERSION == VersionTriple(1, 8, 0)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MESHCHECK_NAMESPACE", "mesh")
        monkeypatch.setenv("MESHCHECK_KUBE_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("MESHCHECK_MIN_KUBERNETES_VERSION", "v1.21.0")

        defaults = KubernetesDefaults.from_env()

        assert defaults.namespace == "mesh"
        assert defaults.request_timeout_seconds == 2.5
        assert defaults.min_version == VersionTriple(1, 21, 0)

    def test_bad_min_version(self, monkeypatch):
        monkeypatch.setenv("MESHCHECK_MIN_KUBERNETES_VERSION", "latest")
        with pytest.raises(VersionParseError):
            KubernetesDefaults.from_env()

    def test_kubeconfig_env_left_to_loader(self, monkeypatch):
        monkeypatch.setenv("KUBECONFIG", "/etc/kube/a" + os.pathsep + "/etc/kube/b")
        assert KubernetesDefaults.from_env().kubeconfig_path is None


class TestGlobalDefaults:

    def test_cached_until_reset(self, monkeypatch):
        first = get_defaults()
        assert get_defaults() is first

        monkeypatch.setenv("MESHCHECK_RPC_TIMEOUT_SECONDS", "1")
        assert get_defaults().control_plane.rpc_timeout_seconds == 5.0

        reset_defaults()
        assert get_defaults().control_plane.rpc_timeout_seconds == 1.0

    def test_frozen_sections(self):
        with pytest.raises(Exception):
            Defaults().kubernetes.namespace = "other"


class TestControlPlaneDefaults:

    def test_builtin_values(self):
        defaults = ControlPlaneDefaults.from_env()
        assert defaults.controller_port_name == "http"
        assert defaults.api_prefix == "api/v1/"

    def test_proxy_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("MESHCHECK_CONTROLLER_SERVICE", "mesh-api")
        monkeypatch.setenv("MESHCHECK_CONTROLLER_PORT_NAME", "grpc-web")
        monkeypatch.setenv("MESHCHECK_API_PREFIX", "api/v2/")

        defaults = ControlPlaneDefaults.from_env()

        assert defaults.controller_service == "mesh-api"
        assert defaults.controller_port_name == "grpc-web"
        assert defaults.api_prefix == "api/v2/"
