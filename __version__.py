# ============================================================================
# VERSION - MESHCHECK
# ============================================================================
# STATUS: Release metadata
# ============================================================================
"""
Version information for meshcheck.

This is the single source of truth for the CLI version. The
"cli is up-to-date" check compares it against the latest published release.
"""
# Version format: <channel>-<major>.<minor>.<patch>
__version__ = "stable-2.4.1"

# Build metadata
BUILD_DATE = "2026-10-17"
