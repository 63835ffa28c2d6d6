# ============================================================================
# HEALTH CHECKER
# ============================================================================
# STATUS: Core - Ordered check execution
# PURPOSE: Run registered checks in order, apply fatal policy, fan out results
# ============================================================================
"""
Health Checker

Owns an append-only, ordered list of Checks and one PipelineContext.
run_checks() executes the checks one at a time in registration order and
reports every leaf outcome to the observer.

Execution rules:
- LocalAction: one observation. On error the run fails; a fatal check
  stops the run immediately.
- RemoteAction: the call is bounded by ``rpc_timeout`` seconds.
  - Call error (timeout included): one observation for the check itself,
    the run fails, a fatal check stops the run, a non-fatal check moves on
    without expanding anything.
  - Call success: no observation for the call; one observation per
    SubResult, in order, under ``category[subsystem]``. A not-OK SubResult
    fails the run but never stops it, whatever the check's fatal flag.
- Failure is sticky: the result is True only if every outcome had no error.

Checks never run concurrently. Later checks read context state written
by earlier ones, and observers rely on a stable order.

Usage:
    checker = HealthChecker()
    checker.add_kubernetes_api_checks(None, "linkerd")
    checker.add_control_plane_api_checks("", "linkerd")
    ok = asyncio.run(checker.run_checks(print_outcome))
"""

import asyncio
import inspect
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from core.config.defaults import Defaults, get_defaults
from core.errors import CheckTimeoutError, RemoteCallError, SubsystemCheckFailure
from core.logging import ComponentType, get_logger, log_context
from health.checks import (
    control_plane_api_checks,
    kubernetes_api_checks,
    version_checks,
)
from health.context import PipelineContext
from health.core import (
    Check,
    CheckObserver,
    LocalAction,
    SubResult,
    sub_category,
)

logger = get_logger(__name__, ComponentType.CHECKER)


async def _invoke(fn: Callable[[], Any]) -> Any:
    """Call a sync or async action."""
    result = fn()
    if inspect.isawaitable(result):
        result = await result
    return result


class HealthChecker:
    """
    Ordered check registry and runner.

    One instance serves one run. Context state from a run (even a partial
    one) must not leak into the next, so run_checks() refuses to run twice.
    """

    def __init__(
        self,
        defaults: Optional[Defaults] = None,
        rpc_timeout: Optional[float] = None,
    ):
        """
        Args:
            defaults: Configuration (global defaults if None)
            rpc_timeout: Bound on each remote call, seconds
                (defaults.control_plane.rpc_timeout_seconds if None)
        """
        self.defaults = defaults or get_defaults()
        self.rpc_timeout = (
            rpc_timeout if rpc_timeout is not None
            else self.defaults.control_plane.rpc_timeout_seconds
        )
        self.context = PipelineContext()
        self._checks: List[Check] = []
        self._consumed = False

    # ------------------------------------------------------------------
    # REGISTRATION
    # ------------------------------------------------------------------

    def add_check(self, check: Check) -> None:
        """Append a check; registration order is execution order."""
        if self._consumed:
            raise RuntimeError("cannot register checks after run_checks()")
        self._checks.append(check)
        logger.debug(
            f"Registered check: {check.category} / {check.description} "
            f"(fatal={check.fatal}, remote={check.is_remote})"
        )

    def add_checks(self, checks: Sequence[Check]) -> None:
        for check in checks:
            self.add_check(check)

    def add_kubernetes_api_checks(
        self,
        kubeconfig_path: Optional[str],
        control_plane_namespace: str,
    ) -> None:
        """Cluster reachability: client, API query, min version, namespace."""
        self.add_checks(kubernetes_api_checks(
            self.context,
            kubeconfig_path,
            control_plane_namespace,
            self.defaults.kubernetes,
        ))

    def add_control_plane_api_checks(
        self,
        api_addr: Optional[str],
        control_plane_namespace: str,
    ) -> None:
        """
        Control plane reachability and self-diagnostics.

        Without ``api_addr`` the client is discovered through the Kubernetes
        API, so add_kubernetes_api_checks() must be registered first.
        """
        self.add_checks(control_plane_api_checks(
            self.context,
            api_addr,
            control_plane_namespace,
            self.defaults.control_plane,
        ))

    def add_version_checks(self, version_override: Optional[str] = None) -> None:
        """
        CLI and control plane release currency.

        The control plane check reads the API client, so register
        add_control_plane_api_checks() first.
        """
        self.add_checks(version_checks(
            self.context,
            version_override,
            self.defaults.release,
        ))

    # ------------------------------------------------------------------
    # INSPECTION
    # ------------------------------------------------------------------

    @property
    def checks(self) -> Tuple[Check, ...]:
        return tuple(self._checks)

    def categories(self) -> List[str]:
        """Category labels in first-registration order."""
        return list(self.checks_by_category().keys())

    def checks_by_category(self) -> Dict[str, List[Check]]:
        """
        Checks grouped by category.

        Derived view only; execution always follows registration order.
        """
        grouped: Dict[str, List[Check]] = OrderedDict()
        for check in self._checks:
            grouped.setdefault(check.category, []).append(check)
        return grouped

    @property
    def public_api_client(self):
        """Control plane client resolved during the run, if any."""
        return self.context.api_client

    def __len__(self) -> int:
        return len(self._checks)

    # ------------------------------------------------------------------
    # EXECUTION
    # ------------------------------------------------------------------

    async def run_checks(self, observer: CheckObserver) -> bool:
        """
        Execute all checks in order, reporting each outcome to ``observer``.

        Returns:
            True if no outcome carried an error.

        Raises:
            RuntimeError: If this instance has already run.
        """
        if self._consumed:
            raise RuntimeError(
                "HealthChecker has already run; build a new one to run again"
            )
        self._consumed = True

        success = True
        start_time = time.monotonic()

        for index, check in enumerate(self._checks):
            with log_context(category=check.category, check=check.description):
                if isinstance(check.action, LocalAction):
                    error = await self._run_local(check.action)
                    observer(check.category, check.description, error)
                    if error is not None:
                        success = False
                        if check.fatal:
                            self._log_halt(check, index)
                            break
                    continue

                sub_results, error = await self._run_remote(check)
                if error is not None:
                    observer(check.category, check.description, error)
                    success = False
                    if check.fatal:
                        self._log_halt(check, index)
                        break
                    continue

                for result in sub_results:
                    result_error = None
                    if not result.ok:
                        success = False
                        result_error = SubsystemCheckFailure(
                            result.subsystem_name, result.failure_message
                        )
                    observer(
                        sub_category(check.category, result.subsystem_name),
                        result.description,
                        result_error,
                    )

        logger.debug(
            f"Checks finished: success={success} "
            f"({(time.monotonic() - start_time) * 1000:.1f}ms)"
        )
        return success

    async def _run_local(self, action: LocalAction) -> Optional[Exception]:
        try:
            await _invoke(action.fn)
        except Exception as e:
            logger.debug(f"Check failed: {type(e).__name__}: {e}")
            return e
        return None

    async def _run_remote(
        self,
        check: Check,
    ) -> Tuple[List[SubResult], Optional[Exception]]:
        try:
            results = await asyncio.wait_for(
                _invoke(check.action.fn),
                timeout=self.rpc_timeout,
            )
        except asyncio.TimeoutError:
            logger.debug(f"Remote check timed out after {self.rpc_timeout}s")
            return [], CheckTimeoutError(check.description, self.rpc_timeout)
        except Exception as e:
            logger.debug(f"Remote check failed: {type(e).__name__}: {e}")
            return [], e

        try:
            sub_results = list(results or [])
        except TypeError:
            sub_results = [results]
        for item in sub_results:
            if not isinstance(item, SubResult):
                error = RemoteCallError(
                    f"{check.description}: expected SubResult, got {type(item).__name__}"
                )
                logger.debug(f"Remote check returned bad result: {error}")
                return [], error
        return sub_results, None

    def _log_halt(self, check: Check, index: int) -> None:
        skipped = len(self._checks) - index - 1
        logger.info(
            f"Fatal check failed: {check.category} / {check.description}; "
            f"skipping {skipped} remaining check(s)"
        )

    # ------------------------------------------------------------------
    # RESOURCES
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Release HTTP clients opened by the checks."""
        await self.context.close()

    async def __aenter__(self) -> "HealthChecker":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["HealthChecker"]
