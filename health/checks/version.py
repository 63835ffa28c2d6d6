# ============================================================================
# VERSION FRESHNESS CHECKS
# ============================================================================
# STATUS: Checks - CLI and control plane release currency
# PURPOSE: Compare running versions against the latest release
# ============================================================================
"""
Version Checks (category "control-plane-version")

1. can get the latest version    fatal     writes latest_version
2. cli is up-to-date             non-fatal reads latest_version
3. control plane is up-to-date   non-fatal reads latest_version, api_client
"""

from typing import List, Optional

from core.config.defaults import ReleaseDefaults
from health.context import PipelineContext
from health.core import Check, CheckCategory, LocalAction
from infrastructure.release import (
    ReleaseClient,
    check_client_version,
    check_server_version,
)

CATEGORY = CheckCategory.CONTROL_PLANE_VERSION.value


def version_checks(
    ctx: PipelineContext,
    version_override: Optional[str] = None,
    defaults: Optional[ReleaseDefaults] = None,
    release_client: Optional[ReleaseClient] = None,
) -> List[Check]:
    """
    Build the control-plane-version checks bound to ``ctx``.

    Args:
        version_override: Expected version; skips the release lookup.
        release_client: Lookup client (defaults to ReleaseClient(defaults)).
    """

    async def latest_version() -> None:
        if version_override:
            ctx.latest_version = version_override
        else:
            client = release_client or ReleaseClient(defaults)
            ctx.latest_version = await client.get_latest_version()

    def cli_up_to_date() -> None:
        check_client_version(ctx.require("latest_version"))

    async def control_plane_up_to_date() -> None:
        await check_server_version(ctx.require("api_client"), ctx.require("latest_version"))

    return [
        Check(CATEGORY, "can get the latest version", True, LocalAction(latest_version)),
        Check(CATEGORY, "cli is up-to-date", False, LocalAction(cli_up_to_date)),
        Check(
            CATEGORY,
            "control plane is up-to-date",
            False,
            LocalAction(control_plane_up_to_date),
        ),
    ]


__all__ = ["version_checks"]
