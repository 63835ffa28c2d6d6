# ============================================================================
# BUILT-IN CHECK GROUPS
# ============================================================================
# STATUS: Checks - Preflight check definitions
# PURPOSE: Ordered check groups for cluster, control plane and versions
# ============================================================================
"""
Built-in Check Groups

Each builder returns an ordered list of Checks whose actions share one
PipelineContext. Register groups in this order; later groups read state
written by earlier ones:

- kubernetes_api_checks:    kubernetes-api
- control_plane_api_checks: control-plane-api
- version_checks:           control-plane-version
"""

from health.checks.kubernetes import kubernetes_api_checks
from health.checks.control_plane import control_plane_api_checks
from health.checks.version import version_checks

__all__ = [
    "kubernetes_api_checks",
    "control_plane_api_checks",
    "version_checks",
]
