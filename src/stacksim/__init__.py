"""
stacksim - A call stack and error propagation simulator

Models how a raised error travels up a single call stack to the nearest
handler, and why a handler set up before a callback was scheduled cannot
catch an error the callback raises later.
"""

__version__ = "0.1.0"

from .errors import (
    CallbackStateError,
    EpisodeTerminated,
    SimulatorError,
    StackOverflow,
    StackUnderflow,
)
from .values import (
    CallbackState,
    Completed,
    DeferredCallback,
    Frame,
    HandledBy,
    Outcome,
    RaisedError,
    Unhandled,
)
from .stack import CallStack
from .propagation import PropagationEngine
from .scheduler import AsyncScheduler
from .simulator import Simulator

__all__ = [
    "AsyncScheduler",
    "CallStack",
    "CallbackState",
    "CallbackStateError",
    "Completed",
    "EpisodeTerminated",
    "DeferredCallback",
    "Frame",
    "HandledBy",
    "Outcome",
    "PropagationEngine",
    "RaisedError",
    "Simulator",
    "SimulatorError",
    "StackOverflow",
    "StackUnderflow",
    "Unhandled",
]
