"""Plain-text pictures of call stacks and outcomes."""

from typing import Iterable, List, Optional, Union

from .stack import CallStack
from .values import Frame, Outcome

HANDLER_MARK = "[try]"


def format_stack(
    stack: Union[CallStack, Iterable[Frame]], title: Optional[str] = None
) -> str:
    """Draw a stack top to bottom, one boxed row per frame.

    A plain iterable of frames is taken to be in top-first order already.
    Frames with a handler are marked with ``[try]``.
    """
    if isinstance(stack, CallStack):
        frames = list(stack.peek_from_top())
    else:
        frames = list(stack)

    lines: List[str] = []
    if title:
        lines.append(title)
    if not frames:
        lines.append("(empty stack)")
        return "\n".join(lines)

    width = max(len(f.name) for f in frames)
    border = "+" + "-" * (width + 2) + "+"
    lines.append(border)
    for frame in frames:
        row = f"| {frame.name.ljust(width)} |"
        if frame.handles_errors:
            row += " " + HANDLER_MARK
        lines.append(row)
    lines.append(border)
    return "\n".join(lines)


def format_outcome(outcome: Outcome) -> str:
    return outcome.describe()
