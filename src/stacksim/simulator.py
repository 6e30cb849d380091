"""Simulator facade and the tutorial's worked scenarios."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .propagation import PropagationEngine
from .render import format_outcome, format_stack
from .scheduler import AsyncScheduler
from .stack import CallStack
from .values import (
    DeferredCallback,
    Frame,
    Outcome,
    RaisedError,
    Unhandled,
)


class Simulator:
    """A call stack, a propagation engine and a scheduler wired together."""

    def __init__(self, max_depth: Optional[int] = None):
        """Create a new simulator.

        Args:
            max_depth: Maximum frames per call stack (None for no limit)
        """
        self.max_depth = max_depth
        self.engine = PropagationEngine()
        self.scheduler = AsyncScheduler(engine=self.engine, max_depth=max_depth)
        self.stack = CallStack(max_depth=max_depth)

    def push(self, name: str, handles_errors: bool = False) -> Frame:
        return self.stack.push(name, handles_errors)

    def pop(self) -> Frame:
        return self.stack.pop()

    def raise_error(self, error: RaisedError) -> Outcome:
        """Raise ``error`` on the current stack."""
        return self.engine.raise_error(self.stack, error)

    def schedule(self, callback: DeferredCallback) -> DeferredCallback:
        return self.scheduler.schedule(callback)

    def defer(
        self,
        action: Callable[[CallStack], Optional[Outcome]],
        label: Optional[str] = None,
    ) -> DeferredCallback:
        """Schedule ``action`` from the current stack."""
        return self.scheduler.defer(action, origin=self.stack, label=label)

    def drain(self) -> List[Outcome]:
        return self.scheduler.drain()


@dataclass
class ScenarioResult:
    """What a scenario produced: its outcomes and a printable transcript."""

    name: str
    outcomes: List[Outcome] = field(default_factory=list)
    transcript: List[str] = field(default_factory=list)

    @property
    def crashed(self) -> bool:
        return any(isinstance(o, Unhandled) for o in self.outcomes)

    def report(self) -> str:
        lines = [f"== {self.name} =="]
        lines.extend(self.transcript)
        for outcome in self.outcomes:
            lines.append(f"=> {format_outcome(outcome)}")
        return "\n".join(lines)


def sync_inverse_scenario(max_depth: Optional[int] = None) -> ScenarioResult:
    """``callInverseSafe`` wraps ``inverse`` in a handler; the error is caught."""
    result = ScenarioResult("sync")
    sim = Simulator(max_depth=max_depth)

    sim.push("callInverseSafe", handles_errors=True)
    sim.push("inverse")
    result.transcript.append(format_stack(sim.stack, "Stack when inverse raises:"))

    outcome = sim.raise_error(RaisedError("ArgumentError", "Argument is not numeric"))
    result.outcomes.append(outcome)
    result.transcript.append(format_stack(sim.stack, "Stack afterwards:"))
    return result


def async_read_file_scenario(max_depth: Optional[int] = None) -> ScenarioResult:
    """The handler around ``readSomeFile`` is gone before its callback fails."""
    result = ScenarioResult("async")
    sim = Simulator(max_depth=max_depth)

    def callback(stack: CallStack) -> Outcome:
        stack.push("callback")
        result.transcript.append(format_stack(stack, "Stack when the callback raises:"))
        return sim.engine.raise_error(
            stack, RaisedError("ENOENT", "no such file or directory")
        )

    sim.push("readFileAndCatchErrors", handles_errors=True)
    sim.push("readSomeFile")
    result.transcript.append(format_stack(sim.stack, "Stack when the read is scheduled:"))
    sim.defer(callback)
    sim.pop()
    sim.pop()
    result.transcript.append(format_stack(sim.stack, "Stack after both functions return:"))

    result.outcomes.extend(sim.drain())
    return result


def callback_with_own_handler_scenario(max_depth: Optional[int] = None) -> ScenarioResult:
    """The callback sets up its own handler, so the error is caught."""
    result = ScenarioResult("callback-handler")
    sim = Simulator(max_depth=max_depth)

    def callback(stack: CallStack) -> Outcome:
        stack.push("callback", handles_errors=True)
        stack.push("handleFileContents")
        result.transcript.append(format_stack(stack, "Stack when the callback raises:"))
        return sim.engine.raise_error(
            stack, RaisedError("ENOENT", "no such file or directory")
        )

    with sim.stack.frame("readFileAndCatchErrors", handles_errors=True):
        with sim.stack.frame("readSomeFile"):
            sim.defer(callback)
    result.transcript.append(format_stack(sim.stack, "Stack after both functions return:"))

    result.outcomes.extend(sim.drain())
    return result


SCENARIOS: Dict[str, Callable[..., ScenarioResult]] = {
    "sync": sync_inverse_scenario,
    "async": async_read_file_scenario,
    "callback-handler": callback_with_own_handler_scenario,
}
