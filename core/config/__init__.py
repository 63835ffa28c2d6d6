# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the preflight checks.
"""

from core.config.defaults import (
    KubernetesDefaults,
    ControlPlaneDefaults,
    ReleaseDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "KubernetesDefaults",
    "ControlPlaneDefaults",
    "ReleaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
