"""Tests for text rendering of stacks."""

from stacksim import CallStack, Completed, HandledBy, RaisedError, Unhandled
from stacksim.render import format_outcome, format_stack


class TestFormatStack:
    """Test stack pictures."""

    def test_empty(self):
        assert format_stack(CallStack()) == "(empty stack)"

    def test_top_first_with_handler_mark(self):
        """Rows run top to bottom and handlers are marked."""
        stack = CallStack()
        stack.push("callInverseSafe", handles_errors=True)
        stack.push("inverse")
        assert format_stack(stack) == "\n".join([
            "+-----------------+",
            "| inverse         |",
            "| callInverseSafe | [try]",
            "+-----------------+",
        ])

    def test_title(self):
        stack = CallStack()
        stack.push("main")
        assert format_stack(stack, "Now:").splitlines()[0] == "Now:"

    def test_frames_iterable(self):
        """A list of frames is drawn in the given order."""
        stack = CallStack()
        a = stack.push("a")
        b = stack.push("b")
        assert format_stack([a, b]).splitlines()[1] == "| a |"


class TestFormatOutcome:
    """Test outcome summaries."""

    def test_outcomes(self):
        assert format_outcome(Unhandled(RaisedError("ENOENT"))) == "Uncaught ENOENT"
        assert format_outcome(HandledBy("safe")) == "handled by safe"
        assert format_outcome(Completed()) == "completed"
