#!/usr/bin/env python3
# ============================================================================
# CLI - CHECK COMMAND
# ============================================================================
# STATUS: Tool - Run preflight checks from a terminal
# PURPOSE: Render check outcomes and map the result to an exit code
# ============================================================================
"""
Run the preflight checks against the current cluster.

Usage:
    # Checks against the cluster in the current kubeconfig context
    meshcheck

    # Different namespace / kubeconfig
    meshcheck -n my-mesh --kubeconfig ~/.kube/staging

    # Talk to the control plane directly (port-forward) instead of via the API proxy
    meshcheck --api-addr localhost:8085

    # Pin the expected release, skip the network lookup
    meshcheck --expected-version stable-2.4.1

    # Machine-readable output
    meshcheck --output json

Exit codes:
    0  every check passed
    2  at least one check failed
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional, TextIO

from __version__ import __version__
from core.config.defaults import get_defaults
from core.logging import configure_logging, get_logger, ComponentType
from health import HealthChecker, OutcomeRecorder

logger = get_logger(__name__, ComponentType.CLI)

LINE_WIDTH = 79
OK_STATUS = "[ok]"
FAIL_STATUS = "[FAIL]"

EXIT_OK = 0
EXIT_FAILED = 2


class BasicObserver:
    """Prints one dotted line per outcome as it arrives."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def __call__(self, category: str, description: str, error: Optional[BaseException]) -> None:
        label = f"{category}: {description}"
        filler = "." * max(LINE_WIDTH - len(label), 3)
        if error is None:
            self.stream.write(f"{label}{filler}{OK_STATUS}\n")
        else:
            self.stream.write(f"{label}{filler}{FAIL_STATUS} -- {error}\n")
        self.stream.flush()


def build_parser() -> argparse.ArgumentParser:
    defaults = get_defaults()
    parser = argparse.ArgumentParser(
        prog="meshcheck",
        description="Check that the control plane and its cluster are reachable, "
                    "compatible and healthy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--kubeconfig",
        default=defaults.kubernetes.kubeconfig_path,
        help="Path to the kubeconfig file (default: $KUBECONFIG or ~/.kube/config)",
    )
    parser.add_argument(
        "--namespace", "-n",
        default=defaults.kubernetes.namespace,
        help=f"Control plane namespace (default: {defaults.kubernetes.namespace})",
    )
    parser.add_argument(
        "--api-addr",
        default=defaults.control_plane.api_addr,
        help="Control plane API address (host:port); bypasses the Kubernetes API proxy",
    )
    parser.add_argument(
        "--expected-version",
        default="",
        help="Release to compare against instead of looking up the latest one",
    )
    parser.add_argument(
        "--skip-version-checks",
        action="store_true",
        help="Do not check whether the CLI and control plane are up-to-date",
    )
    parser.add_argument(
        "--output", "-o",
        choices=("basic", "json"),
        default="basic",
        help="Output format (default: basic)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        help="Log level for diagnostics on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_checker(args: argparse.Namespace) -> HealthChecker:
    """Register the check groups selected by ``args``, in dependency order."""
    checker = HealthChecker()
    checker.add_kubernetes_api_checks(args.kubeconfig, args.namespace)
    checker.add_control_plane_api_checks(args.api_addr, args.namespace)
    if not args.skip_version_checks:
        checker.add_version_checks(args.expected_version or None)
    return checker


async def run(args: argparse.Namespace, stream: TextIO) -> bool:
    """Run the checks and render them to ``stream``."""
    async with build_checker(args) as checker:
        if args.output == "json":
            recorder = OutcomeRecorder()
            success = await checker.run_checks(recorder)
            json.dump(
                {
                    "success": success,
                    "checks": [outcome.to_dict() for outcome in recorder.outcomes],
                },
                stream,
                indent=2,
            )
            stream.write("\n")
            return success

        success = await checker.run_checks(BasicObserver(stream))
        status = OK_STATUS if success else FAIL_STATUS
        stream.write(f"\nStatus check results are {status}\n")
        return success


def main(argv: Optional[List[str]] = None, stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    success = asyncio.run(run(args, stream or sys.stdout))
    logger.debug(f"meshcheck finished (success={success})")
    return EXIT_OK if success else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
