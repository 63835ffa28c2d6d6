# ============================================================================
# CLI TESTS
# ============================================================================
# STATUS: Tests - meshcheck command
# PURPOSE: Verify rendering, check registration and exit codes
# ============================================================================
"""
CLI Tests

HealthChecker is replaced with a stub that replays canned outcomes.

Run with:
    pytest tests/test_cli.py -v
"""

import io
import json
import pytest
from unittest.mock import patch

from cli.check import (
    EXIT_FAILED,
    EXIT_OK,
    BasicObserver,
    build_checker,
    build_parser,
    main,
)
from core.config.defaults import reset_defaults


@pytest.fixture(autouse=True)
def _fresh_defaults(monkeypatch):
    for var in ("KUBECONFIG", "MESHCHECK_NAMESPACE", "MESHCHECK_API_ADDR", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    reset_defaults()
    yield
    reset_defaults()


class StubChecker:
    """Replays (category, description, error) tuples to the observer."""

    def __init__(self, outcomes):
        self.outcomes = outcomes

    async def run_checks(self, observer):
        success = True
        for category, description, error in self.outcomes:
            observer(category, description, error)
            if error is not None:
                success = False
        return success

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None


# ============================================================================
# RENDERING
# ============================================================================

class TestBasicObserver:

    def test_ok_line(self):
        out = io.StringIO()
        BasicObserver(out)("kubernetes-api", "can initialize the client", None)
        line = out.getvalue()
        assert line.startswith("kubernetes-api: can initialize the client...")
        assert line.endswith("[ok]\n")
        assert len(line.rstrip("\n")) == 79 + len("[ok]")

    def test_fail_line(self):
        out = io.StringIO()
        BasicObserver(out)("kubernetes-api", "control plane namespace exists",
                           RuntimeError('The "linkerd" namespace does not exist'))
        assert out.getvalue().endswith(
            '[FAIL] -- The "linkerd" namespace does not exist\n'
        )

    def test_long_label_keeps_filler(self):
        out = io.StringIO()
        BasicObserver(out)("c" * 100, "d", None)
        assert "...[ok]" in out.getvalue()


# ============================================================================
# REGISTRATION
# ============================================================================

class TestBuildChecker:

    def test_all_groups_in_order(self):
        args = build_parser().parse_args([])
        checker = build_checker(args)
        assert checker.categories() == [
            "kubernetes-api",
            "control-plane-api",
            "control-plane-version",
        ]

    def test_skip_version_checks(self):
        args = build_parser().parse_args(["--skip-version-checks"])
        checker = build_checker(args)
        assert "control-plane-version" not in checker.categories()

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.namespace == "linkerd"
        assert args.api_addr == ""
        assert args.output == "basic"


# ============================================================================
# MAIN
# ============================================================================

class TestMain:

    @patch("cli.check.build_checker")
    def test_success_exit_code(self, mock_build):
        mock_build.return_value = StubChecker([
            ("kubernetes-api", "can initialize the client", None),
            ("control-plane-api[prometheus]", "can query Prometheus", None),
        ])
        out = io.StringIO()

        assert main([], stream=out) == EXIT_OK
        assert out.getvalue().strip().endswith("Status check results are [ok]")

    @patch("cli.check.build_checker")
    def test_failure_exit_code(self, mock_build):
        mock_build.return_value = StubChecker([
            ("kubernetes-api", "can initialize the client", RuntimeError("no kubeconfig")),
        ])
        out = io.StringIO()

        assert main([], stream=out) == EXIT_FAILED
        assert "[FAIL] -- no kubeconfig" in out.getvalue()
        assert out.getvalue().strip().endswith("Status check results are [FAIL]")

    @patch("cli.check.build_checker")
    def test_json_output(self, mock_build):
        mock_build.return_value = StubChecker([
            ("kubernetes-api", "can initialize the client", None),
            ("control-plane-api[prometheus]", "can query Prometheus", RuntimeError("down")),
        ])
        out = io.StringIO()

        assert main(["--output", "json"], stream=out) == EXIT_FAILED
        document = json.loads(out.getvalue())
        assert document["success"] is False
        assert document["checks"][1] == {
            "category": "control-plane-api[prometheus]",
            "description": "can query Prometheus",
            "ok": False,
            "error": "down",
            "error_type": "RuntimeError",
        }
