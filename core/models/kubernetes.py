# ============================================================================
# CLAUDE CONTEXT - KUBERNETES WIRE MODELS
# ============================================================================
# STATUS: Core - Pydantic model for the Kubernetes /version endpoint
# PURPOSE: Typed shape of the API server version document
# EXPORTS: KubernetesVersionInfo
# DEPENDENCIES: pydantic
# ============================================================================
"""
Kubernetes version document as served by ``GET /version``.
"""

from pydantic import BaseModel, ConfigDict, Field


class KubernetesVersionInfo(BaseModel):
    """API server build information. Keys are camelCase on the wire."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    major: str = ""
    minor: str = ""
    git_version: str = Field(default="", alias="gitVersion")
    git_commit: str = Field(default="", alias="gitCommit")
    build_date: str = Field(default="", alias="buildDate")
    go_version: str = Field(default="", alias="goVersion")
    platform: str = ""

    def __str__(self) -> str:
        return self.git_version


__all__ = ["KubernetesVersionInfo"]
