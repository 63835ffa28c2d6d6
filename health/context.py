# ============================================================================
# PIPELINE CONTEXT
# ============================================================================
# STATUS: Core - Run-scoped state shared between ordered checks
# PURPOSE: Handles and values written by early checks, read by later ones
# ============================================================================
"""
Pipeline Context

Mutable state threaded through one run of a HealthChecker. Fields are
filled progressively; each is written by exactly one check and read only
by checks registered after it:

    kube_api        written: kubernetes-api "can initialize the client"
                    read:    kubernetes-api checks, control plane discovery
    http_client     written: kubernetes-api "can query the Kubernetes API"
                    read:    "control plane namespace exists"
    kube_version    written: kubernetes-api "can query the Kubernetes API"
                    read:    "is running the minimum Kubernetes API version"
    api_client      written: control-plane-api "can initialize the client"
                    read:    "can query the control plane API",
                             "control plane is up-to-date"
    latest_version  written: control-plane-version "can get the latest version"
                    read:    "cli is up-to-date", "control plane is up-to-date"

Reordering registrations breaks these dependencies. A read of an unset
field raises PipelineStateError, which the engine reports like any other
check error.

A context belongs to a single run; build a new HealthChecker to run again.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional

from core.errors import PipelineStateError


@dataclass
class PipelineContext:
    """Run-scoped state for the built-in check groups."""
    kube_api: Optional[Any] = None
    http_client: Optional[Any] = None
    kube_version: Optional[Any] = None
    api_client: Optional[Any] = None
    latest_version: Optional[str] = None

    def require(self, field_name: str) -> Any:
        """
        Return a populated field.

        Raises:
            PipelineStateError: If no earlier check has written it.
        """
        if field_name not in {f.name for f in fields(self)}:
            raise AttributeError(f"PipelineContext has no field '{field_name}'")
        value = getattr(self, field_name)
        if value is None:
            raise PipelineStateError(field_name)
        return value

    def populated(self) -> list:
        """Names of fields written so far."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    async def close(self) -> None:
        """Release HTTP resources owned by the run."""
        if self.api_client is not None and hasattr(self.api_client, "close"):
            await self.api_client.close()
        if self.http_client is not None and hasattr(self.http_client, "aclose"):
            await self.http_client.aclose()


__all__ = ["PipelineContext"]
