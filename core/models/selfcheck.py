# ============================================================================
# CLAUDE CONTEXT - CONTROL PLANE WIRE MODELS
# ============================================================================
# STATUS: Core - Pydantic models for the control plane public API
# PURPOSE: Typed shape of SelfCheck and Version responses
# EXPORTS: CheckStatus, SelfCheckResult, SelfCheckResponse, VersionResponse
# DEPENDENCIES: pydantic
# ============================================================================
"""
Control Plane Wire Models

The control plane answers ``POST api/v1/SelfCheck`` with a JSON document:

    {
      "results": [
        {
          "subsystem_name": "kubernetes-api",
          "check_description": "can query the Kubernetes API",
          "status": "OK",
          "friendly_message_to_user": ""
        }
      ]
    }

Only ``OK`` counts as success; ``FAIL`` and ``ERROR`` are both failures.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckStatus(str, Enum):
    """Status of one subsystem check."""
    OK = "OK"
    FAIL = "FAIL"
    ERROR = "ERROR"

    def is_ok(self) -> bool:
        return self is CheckStatus.OK


class SelfCheckResult(BaseModel):
    """One subsystem outcome inside a SelfCheck response."""

    model_config = ConfigDict(extra="ignore")

    subsystem_name: str = Field(..., description="Subsystem that ran the check")
    check_description: str = Field(default="", description="What was verified")
    status: CheckStatus = Field(..., description="OK, FAIL or ERROR")
    friendly_message_to_user: str = Field(
        default="",
        description="User-facing failure text, shown verbatim",
    )

    def to_sub_result(self):
        """Convert to the engine's SubResult."""
        from health.core import SubResult

        return SubResult(
            subsystem_name=self.subsystem_name,
            ok=self.status.is_ok(),
            description=self.check_description,
            failure_message=self.friendly_message_to_user,
        )


class SelfCheckResponse(BaseModel):
    """Ordered batch of subsystem outcomes."""

    model_config = ConfigDict(extra="ignore")

    results: List[SelfCheckResult] = Field(default_factory=list)

    def sub_results(self) -> list:
        """Convert to engine SubResults, preserving order."""
        return [result.to_sub_result() for result in self.results]


class VersionResponse(BaseModel):
    """Control plane build information."""

    model_config = ConfigDict(extra="ignore")

    release_version: str
    go_version: Optional[str] = None
    build_date: Optional[str] = None


__all__ = [
    "CheckStatus",
    "SelfCheckResult",
    "SelfCheckResponse",
    "VersionResponse",
]
