# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for cluster access, RPC timeouts, version policy
# ============================================================================
"""
Configuration Defaults

Provides defaults for the preflight checks. Every value can be overridden
via environment variables; CLI flags override those in turn.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Minimum Kubernetes version is configuration, not a constant
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from core.versioning import VersionTriple, parse_version


DEFAULT_NAMESPACE = "linkerd"
DEFAULT_MIN_KUBERNETES_VERSION = VersionTriple(1, 8, 0)


@dataclass(frozen=True)
class KubernetesDefaults:
    """
    Defaults for reaching the Kubernetes API.

    kubeconfig_path=None means: first entry of $KUBECONFIG, then
    ~/.kube/config. $KUBECONFIG is read at load time, not here.
    """
    kubeconfig_path: Optional[str] = None
    namespace: str = DEFAULT_NAMESPACE
    request_timeout_seconds: float = 5.0
    min_version: VersionTriple = DEFAULT_MIN_KUBERNETES_VERSION

    @classmethod
    def from_env(cls) -> "KubernetesDefaults":
        """Create from environment variables."""
        min_version = os.getenv("MESHCHECK_MIN_KUBERNETES_VERSION")
        return cls(
            namespace=os.getenv("MESHCHECK_NAMESPACE", DEFAULT_NAMESPACE),
            request_timeout_seconds=float(os.getenv("MESHCHECK_KUBE_TIMEOUT_SECONDS", 5.0)),
            min_version=(
                parse_version(min_version) if min_version
                else DEFAULT_MIN_KUBERNETES_VERSION
            ),
        )


@dataclass(frozen=True)
class ControlPlaneDefaults:
    """
    Defaults for the control plane public API.

    api_addr empty means discover the API through the Kubernetes proxy.
    """
    api_addr: str = ""
    controller_service: str = "linkerd-controller-api"
    controller_port_name: str = "http"
    api_prefix: str = "api/v1/"
    rpc_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "ControlPlaneDefaults":
        """Create from environment variables."""
        return cls(
            api_addr=os.getenv("MESHCHECK_API_ADDR", ""),
            controller_service=os.getenv("MESHCHECK_CONTROLLER_SERVICE", "linkerd-controller-api"),
            controller_port_name=os.getenv("MESHCHECK_CONTROLLER_PORT_NAME", "http"),
            api_prefix=os.getenv("MESHCHECK_API_PREFIX", "api/v1/"),
            rpc_timeout_seconds=float(os.getenv("MESHCHECK_RPC_TIMEOUT_SECONDS", 5.0)),
        )


@dataclass(frozen=True)
class ReleaseDefaults:
    """Defaults for the latest-release lookup service."""
    version_check_url: str = "https://versioncheck.linkerd.io/version.json"
    request_timeout_seconds: float = 5.0
    source: str = "cli"

    @classmethod
    def from_env(cls) -> "ReleaseDefaults":
        """Create from environment variables."""
        return cls(
            version_check_url=os.getenv(
                "MESHCHECK_VERSION_CHECK_URL",
                "https://versioncheck.linkerd.io/version.json",
            ),
            request_timeout_seconds=float(os.getenv("MESHCHECK_VERSION_CHECK_TIMEOUT_SECONDS", 5.0)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    kubernetes: KubernetesDefaults = field(default_factory=KubernetesDefaults)
    control_plane: ControlPlaneDefaults = field(default_factory=ControlPlaneDefaults)
    release: ReleaseDefaults = field(default_factory=ReleaseDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            kubernetes=KubernetesDefaults.from_env(),
            control_plane=ControlPlaneDefaults.from_env(),
            release=ReleaseDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_NAMESPACE",
    "DEFAULT_MIN_KUBERNETES_VERSION",
    "KubernetesDefaults",
    "ControlPlaneDefaults",
    "ReleaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
