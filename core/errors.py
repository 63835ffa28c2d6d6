# ============================================================================
# CLAUDE CONTEXT - ERROR TAXONOMY
# ============================================================================
# STATUS: Foundation - Exceptions surfaced to check observers
# PURPOSE: One exception type per failure class a check can report
# EXPORTS: HealthCheckError and subclasses
# ============================================================================
"""
Error taxonomy for the preflight pipeline.

Every exception here ends up as the ``error`` argument of a check observer.
The message (``str(e)``) is what the user reads, so messages are written as
full sentences a cluster operator can act on.
"""

from typing import Optional


class HealthCheckError(Exception):
    """Base exception for all check failures."""
    pass


class ClientInitError(HealthCheckError):
    """Raised when a client (Kubernetes, control plane) cannot be constructed."""
    pass


class ClusterConnectionError(HealthCheckError):
    """Raised when a remote endpoint cannot be reached."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class CheckTimeoutError(HealthCheckError):
    """Raised when a remote call exceeds its time budget."""

    def __init__(self, operation: str, timeout_seconds: float):
        self.operation = operation
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{operation} timed out after {timeout_seconds:g}s")


class ProtocolError(HealthCheckError):
    """Raised when an endpoint answers with an unexpected status code."""

    def __init__(self, status_code: int, reason: str = "", service: str = "Kubernetes API"):
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}".strip()
        super().__init__(f"Unexpected {service} response: {status}")


class NamespaceNotFoundError(HealthCheckError):
    """Raised when the control plane namespace is missing from the cluster."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f'The "{namespace}" namespace does not exist')


class VersionParseError(HealthCheckError):
    """Raised when a version string has no numeric major.minor.patch triple."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"unknown version string format [{raw}]")


class VersionIncompatibleError(HealthCheckError):
    """Raised when a parsable version is older than the required minimum."""

    def __init__(self, actual, required, subject: str = "Kubernetes"):
        self.actual = actual
        self.required = required
        self.subject = subject
        super().__init__(
            f"{subject} is on version [{actual}], "
            f"but version [{required}] or more recent is required"
        )


class VersionOutOfDateError(HealthCheckError):
    """Raised when a component is not running the latest release."""

    def __init__(self, current: str, latest: str):
        self.current = current
        self.latest = latest
        super().__init__(
            f"is running version {current} but the latest version is {latest}"
        )


class RemoteCallError(HealthCheckError):
    """Raised when a control plane RPC fails."""

    def __init__(self, message: str, method: Optional[str] = None):
        self.method = method
        super().__init__(message)


class SubsystemCheckFailure(HealthCheckError):
    """
    A not-OK entry reported by the control plane self-check.

    The message is the subsystem's own user-facing text, verbatim.
    """

    def __init__(self, subsystem: str, message: str):
        self.subsystem = subsystem
        super().__init__(message)


class PipelineStateError(HealthCheckError):
    """Raised when a check reads context state no earlier check has written."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"pipeline state '{field_name}' is not available; "
            f"an earlier check must populate it"
        )


__all__ = [
    "HealthCheckError",
    "ClientInitError",
    "ClusterConnectionError",
    "CheckTimeoutError",
    "ProtocolError",
    "NamespaceNotFoundError",
    "VersionParseError",
    "VersionIncompatibleError",
    "VersionOutOfDateError",
    "RemoteCallError",
    "SubsystemCheckFailure",
    "PipelineStateError",
]
