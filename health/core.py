# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Check definitions and outcome types
# PURPOSE: Check / action variants, sub-results, leaf outcomes, observers
# ============================================================================
"""
Health Check Core Types

A Check is one named verification step. Its action is exactly one of:

- LocalAction: ``fn()`` returns None on success and raises on failure.
- RemoteAction: ``fn()`` returns an ordered sequence of SubResult, or raises
  if the remote call itself failed.

Either kind of ``fn`` may be a plain function or a coroutine function.

Each Check produces LeafOutcomes for the observer:
- LocalAction, or a RemoteAction whose call failed: exactly one outcome.
- RemoteAction whose call succeeded: one outcome per SubResult, with the
  category suffixed as ``category[subsystem]``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    List,
    Optional,
    Sequence,
    Union,
)


class CheckCategory(str, Enum):
    """Built-in check groups, in their usual registration order."""
    KUBERNETES_API = "kubernetes-api"
    CONTROL_PLANE_API = "control-plane-api"
    CONTROL_PLANE_VERSION = "control-plane-version"


@dataclass(frozen=True)
class SubResult:
    """One subsystem's outcome inside a remote self-check response."""
    subsystem_name: str
    ok: bool
    description: str = ""
    failure_message: str = ""


# Action callables
LocalFn = Callable[[], Union[None, Awaitable[None]]]
RemoteFn = Callable[[], Union[Sequence[SubResult], Awaitable[Sequence[SubResult]]]]


@dataclass(frozen=True)
class LocalAction:
    """Inline predicate: returns on success, raises on failure."""
    fn: LocalFn


@dataclass(frozen=True)
class RemoteAction:
    """Remote self-check call returning a batch of SubResults."""
    fn: RemoteFn


Action = Union[LocalAction, RemoteAction]


@dataclass(frozen=True)
class Check:
    """
    A registered verification step.

    Attributes:
        category: Grouping label (e.g. "kubernetes-api")
        description: Human-readable statement of what is verified
        fatal: If True, an error from the action halts the whole run.
            For a RemoteAction this gates only the call itself, not the
            SubResults it returns.
        action: LocalAction or RemoteAction
    """
    category: str
    description: str
    fatal: bool
    action: Action

    def __post_init__(self):
        if not isinstance(self.action, (LocalAction, RemoteAction)):
            raise TypeError(
                f"Check action must be LocalAction or RemoteAction, "
                f"got {type(self.action).__name__}"
            )
        if isinstance(self.category, Enum):
            object.__setattr__(self, "category", self.category.value)

    @property
    def is_remote(self) -> bool:
        return isinstance(self.action, RemoteAction)


def sub_category(category: str, subsystem_name: str) -> str:
    """Category label for a SubResult: ``category[subsystem]``."""
    return f"{category}[{subsystem_name}]"


@dataclass(frozen=True)
class LeafOutcome:
    """The unit reported to an observer."""
    category: str
    description: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        result = {
            "category": self.category,
            "description": self.description,
            "ok": self.ok,
        }
        if self.error is not None:
            result["error"] = str(self.error)
            result["error_type"] = type(self.error).__name__
        return result


# Observer signature: (category, description, error-or-None)
CheckObserver = Callable[[str, str, Optional[BaseException]], Any]


class OutcomeRecorder:
    """
    Observer that records every LeafOutcome in call order.

    Example:
        recorder = OutcomeRecorder()
        ok = await checker.run_checks(recorder)
        failed = [o for o in recorder.outcomes if not o.ok]
    """

    def __init__(self):
        self.outcomes: List[LeafOutcome] = []

    def __call__(
        self,
        category: str,
        description: str,
        error: Optional[BaseException],
    ) -> None:
        self.outcomes.append(LeafOutcome(category, description, error))

    @property
    def failures(self) -> List[LeafOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def __len__(self) -> int:
        return len(self.outcomes)


__all__ = [
    "CheckCategory",
    "SubResult",
    "LocalAction",
    "RemoteAction",
    "Action",
    "Check",
    "sub_category",
    "LeafOutcome",
    "CheckObserver",
    "OutcomeRecorder",
]
