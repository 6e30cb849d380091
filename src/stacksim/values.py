"""Simulator value types: frames, raised errors, outcomes and callbacks."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional, Union

from .errors import CallbackStateError

if TYPE_CHECKING:
    from .stack import CallStack


@dataclass(frozen=True)
class Frame:
    """One function activation on a call stack."""

    name: str
    handles_errors: bool = False
    id: int = 0  # Assigned by CallStack.push

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RaisedError:
    """A simulated error condition, e.g. ``RaisedError("ENOENT", "no such file")``."""

    kind: str
    message: str = ""

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}" if self.message else self.kind


@dataclass(frozen=True)
class HandledBy:
    """The error was caught by the named frame."""

    frame_name: str
    frame_id: Optional[int] = field(default=None, compare=False)
    error: Optional[RaisedError] = field(default=None, compare=False)

    @property
    def handled(self) -> bool:
        return True

    def describe(self) -> str:
        if self.error is not None:
            return f"{self.error} handled by {self.frame_name}"
        return f"handled by {self.frame_name}"


@dataclass(frozen=True)
class Unhandled:
    """No frame caught the error; the episode crashed."""

    error: RaisedError

    @property
    def handled(self) -> bool:
        return False

    def describe(self) -> str:
        return f"Uncaught {self.error}"


@dataclass(frozen=True)
class Completed:
    """A deferred callback ran to completion without raising."""

    @property
    def handled(self) -> bool:
        return True

    def describe(self) -> str:
        return "completed"


Outcome = Union[HandledBy, Unhandled, Completed]


class CallbackState(Enum):
    """Lifecycle of a deferred callback."""

    SCHEDULED = auto()
    EXECUTING = auto()
    HANDLED = auto()
    UNHANDLED = auto()
    COMPLETED = auto()


_TRANSITIONS = {
    CallbackState.SCHEDULED: (CallbackState.EXECUTING,),
    CallbackState.EXECUTING: (
        CallbackState.HANDLED,
        CallbackState.UNHANDLED,
        CallbackState.COMPLETED,
    ),
}


def state_for_outcome(outcome: Outcome) -> CallbackState:
    """Return the terminal callback state matching an outcome."""
    if isinstance(outcome, HandledBy):
        return CallbackState.HANDLED
    if isinstance(outcome, Unhandled):
        return CallbackState.UNHANDLED
    return CallbackState.COMPLETED


@dataclass(eq=False)
class DeferredCallback:
    """A continuation to be run later, on a fresh call stack.

    ``origin_frame_id`` records which frame was on top when the callback
    was scheduled. It is only reported, never consulted when routing an
    error raised by ``action``.
    """

    action: Callable[["CallStack"], Optional[Outcome]]
    origin_frame_id: Optional[int] = None
    scheduled_at_episode: int = 0
    label: str = ""
    state: CallbackState = CallbackState.SCHEDULED

    def __post_init__(self) -> None:
        if not self.label:
            self.label = getattr(self.action, "__name__", "callback")

    def advance(self, new_state: CallbackState) -> None:
        """Move to ``new_state``, rejecting transitions the lifecycle forbids."""
        if new_state not in _TRANSITIONS.get(self.state, ()):
            raise CallbackStateError(
                f"{self.label}: cannot go from {self.state.name} to {new_state.name}"
            )
        self.state = new_state

    def __repr__(self) -> str:
        return (
            f"DeferredCallback({self.label!r}, state={self.state.name}, "
            f"origin_frame_id={self.origin_frame_id}, "
            f"scheduled_at_episode={self.scheduled_at_episode})"
        )
