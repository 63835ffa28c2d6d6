# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core - Preflight check pipeline
# PURPOSE: Ordered, fail-fast verification of cluster and control plane
# ============================================================================
"""
Health Check Module

Ordered check pipeline for a cluster and its control plane:
- Check: one named step with a LocalAction or RemoteAction
- PipelineContext: state written by early checks, read by later ones
- HealthChecker: runs checks in order, applies fatal policy, fans out
  remote self-check results to the observer

Usage:
    from health import HealthChecker, OutcomeRecorder

    checker = HealthChecker()
    checker.add_kubernetes_api_checks(kubeconfig_path=None, control_plane_namespace="linkerd")
    checker.add_control_plane_api_checks(api_addr="", control_plane_namespace="linkerd")
    checker.add_version_checks()

    recorder = OutcomeRecorder()
    ok = await checker.run_checks(recorder)
"""

from health.core import (
    CheckCategory,
    SubResult,
    LocalAction,
    RemoteAction,
    Check,
    LeafOutcome,
    CheckObserver,
    OutcomeRecorder,
    sub_category,
)
from health.context import PipelineContext
from health.checker import HealthChecker

__all__ = [
    # Core types
    "CheckCategory",
    "SubResult",
    "LocalAction",
    "RemoteAction",
    "Check",
    "LeafOutcome",
    "CheckObserver",
    "OutcomeRecorder",
    "sub_category",
    # Context
    "PipelineContext",
    # Runner
    "HealthChecker",
]
