# ============================================================================
# CLI MODULE
# ============================================================================
# STATUS: Tool - Command line entry points
# PURPOSE: meshcheck command
# ============================================================================

from cli.check import main

__all__ = ["main"]
