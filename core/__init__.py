# ============================================================================
# CLAUDE CONTEXT - CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export errors, version comparator and wire models
# ============================================================================

from core.errors import HealthCheckError
from core.versioning import (
    VersionTriple,
    parse_version,
    is_compatible,
    check_minimum_version,
)

__all__ = [
    "HealthCheckError",
    "VersionTriple",
    "parse_version",
    "is_compatible",
    "check_minimum_version",
]
