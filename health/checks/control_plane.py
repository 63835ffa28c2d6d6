# ============================================================================
# CONTROL PLANE API CHECKS
# ============================================================================
# STATUS: Checks - Control plane reachability and self-diagnostics
# PURPOSE: Resolve the API client and expand the remote self-check
# ============================================================================
"""
Control Plane API Checks (category "control-plane-api")

1. can initialize the client        fatal  writes api_client (reads kube_api
                                           when no direct address is given)
2. can query the control plane API  fatal  remote self-check; one outcome per
                                           subsystem as control-plane-api[<name>]
"""

from typing import List, Optional

from core.config.defaults import ControlPlaneDefaults
from health.context import PipelineContext
from health.core import Check, CheckCategory, LocalAction, RemoteAction, SubResult
from infrastructure.control_plane import ControlPlaneClient

CATEGORY = CheckCategory.CONTROL_PLANE_API.value


def control_plane_api_checks(
    ctx: PipelineContext,
    api_addr: Optional[str],
    namespace: str,
    defaults: Optional[ControlPlaneDefaults] = None,
) -> List[Check]:
    """Build the control-plane-api checks bound to ``ctx``."""
    defaults = defaults or ControlPlaneDefaults()

    def init_client() -> None:
        if api_addr:
            ctx.api_client = ControlPlaneClient.from_address(namespace, api_addr, defaults)
        else:
            ctx.api_client = ControlPlaneClient.from_kubernetes(
                namespace, ctx.require("kube_api"), defaults
            )

    async def self_check() -> List[SubResult]:
        response = await ctx.require("api_client").self_check()
        return response.sub_results()

    return [
        Check(CATEGORY, "can initialize the client", True, LocalAction(init_client)),
        Check(CATEGORY, "can query the control plane API", True, RemoteAction(self_check)),
    ]


__all__ = ["control_plane_api_checks"]
