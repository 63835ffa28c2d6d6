# ============================================================================
# CLAUDE CONTEXT - CORE MODELS
# ============================================================================
# STATUS: Core - Wire models consumed from collaborators
# PURPOSE: Export pydantic models for Kubernetes and control plane responses
# ============================================================================

from core.models.kubernetes import KubernetesVersionInfo
from core.models.selfcheck import (
    CheckStatus,
    SelfCheckResult,
    SelfCheckResponse,
    VersionResponse,
)

__all__ = [
    "KubernetesVersionInfo",
    "CheckStatus",
    "SelfCheckResult",
    "SelfCheckResponse",
    "VersionResponse",
]
