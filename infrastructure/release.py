# ============================================================================
# RELEASE VERSION LOOKUP
# ============================================================================
# STATUS: Infrastructure - Latest release lookup and up-to-date checks
# PURPOSE: Compare the CLI and control plane against the latest release
# ============================================================================
"""
Release Version Lookup

- ReleaseClient.get_latest_version(): GET the version-check endpoint,
  which answers {"version": "<latest>"}.
- check_client_version(latest): the CLI must run exactly the latest release.
- check_server_version(api_client, latest): same for the control plane,
  using its Version RPC.
"""

from typing import Optional

import httpx

from __version__ import __version__
from core.config.defaults import ReleaseDefaults
from core.errors import (
    CheckTimeoutError,
    ClusterConnectionError,
    HealthCheckError,
    ProtocolError,
    VersionOutOfDateError,
)
from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.RELEASE)


class ReleaseClient:
    """Looks up the latest published release."""

    def __init__(
        self,
        defaults: Optional[ReleaseDefaults] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.defaults = defaults or ReleaseDefaults()
        self._client = http_client

    async def get_latest_version(self, current: str = __version__) -> str:
        """
        Fetch the latest release string.

        Raises:
            ProtocolError: Non-200 response.
            CheckTimeoutError / ClusterConnectionError: Transport failure.
            HealthCheckError: Response without a version.
        """
        url = self.defaults.version_check_url
        params = {"version": current, "source": self.defaults.source}
        timeout = self.defaults.request_timeout_seconds

        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=timeout)
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise CheckTimeoutError("latest version lookup", timeout) from e
        except httpx.TransportError as e:
            raise ClusterConnectionError(f"cannot reach {url}: {e}", url=url) from e

        if response.status_code != 200:
            raise ProtocolError(
                response.status_code, response.reason_phrase, service="version check"
            )

        try:
            latest = response.json().get("version")
        except (ValueError, AttributeError) as e:
            raise HealthCheckError(f"invalid response from {url}: {e}") from e

        if not latest:
            raise HealthCheckError(f"no version in response from {url}")

        logger.debug(f"Latest release: {latest}")
        return latest


def check_client_version(latest: str, current: str = __version__) -> None:
    """
    Raises:
        VersionOutOfDateError: If the CLI is not on the latest release.
    """
    if current != latest:
        raise VersionOutOfDateError(current, latest)


async def check_server_version(api_client, latest: str) -> None:
    """
    Raises:
        VersionOutOfDateError: If the control plane is not on the latest release.
        RemoteCallError and friends: If the Version RPC fails.
    """
    response = await api_client.version()
    if response.release_version != latest:
        raise VersionOutOfDateError(response.release_version, latest)


__all__ = [
    "ReleaseClient",
    "check_client_version",
    "check_server_version",
]
