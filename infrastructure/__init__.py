# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - External collaborators
# PURPOSE: Kubernetes API, control plane API and release lookup clients
# ============================================================================
"""
Infrastructure module for meshcheck.

Provides:
- KubernetesAPI: kubeconfig-based access to the cluster API
- ControlPlaneClient: control plane public API (SelfCheck, Version)
- ReleaseClient: latest release lookup, plus up-to-date checks

Usage:
    from infrastructure import KubernetesAPI

    api = KubernetesAPI.from_kubeconfig()
    async with api.new_client() as client:
        info = await api.get_version_info(client)
"""

from infrastructure.kubernetes import KubeConfig, KubernetesAPI
from infrastructure.control_plane import ControlPlaneClient
from infrastructure.release import (
    ReleaseClient,
    check_client_version,
    check_server_version,
)

__all__ = [
    "KubeConfig",
    "KubernetesAPI",
    "ControlPlaneClient",
    "ReleaseClient",
    "check_client_version",
    "check_server_version",
]
