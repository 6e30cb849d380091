"""Error propagation: find the nearest handler and unwind to it."""

import logging
from typing import Optional

from .stack import CallStack
from .values import Frame, HandledBy, Outcome, RaisedError, Unhandled

logger = logging.getLogger(__name__)


class PropagationEngine:
    """Resolves raised errors against a call stack."""

    def find_handler(self, stack: CallStack) -> Optional[Frame]:
        """Return the topmost frame with a handler, or None."""
        for frame in stack.peek_from_top():
            if frame.handles_errors:
                return frame
        return None

    def raise_error(self, stack: CallStack, error: RaisedError) -> Outcome:
        """Raise ``error`` at the top of ``stack`` and report who caught it.

        Frames above the handler are unwound, then the handler frame itself
        is popped: its catch block runs and the enclosing function returns.
        With no handler the stack is torn down and ``Unhandled`` is
        returned. Either way the outcome is recorded on the stack. Nothing
        is ever thrown for a simulated error.
        """
        handler = self.find_handler(stack)

        if handler is None:
            dropped = stack.clear()
            logger.warning(
                "Uncaught %s (%d frame(s) torn down)", error, len(dropped)
            )
            outcome = Unhandled(error)
            stack.record(outcome)
            return outcome

        # Unwind call stack
        while stack.top is not handler:
            frame = stack.pop()
            logger.debug("unwind %s#%d for %s", frame.name, frame.id, error.kind)

        stack.pop()
        logger.info("%s handled by %s#%d", error, handler.name, handler.id)
        outcome = HandledBy(handler.name, frame_id=handler.id, error=error)
        stack.record(outcome)
        return outcome
