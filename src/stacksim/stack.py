"""The simulated call stack."""

import itertools
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from .errors import EpisodeTerminated, SimulatorError, StackOverflow, StackUnderflow
from .values import Frame, Outcome, Unhandled

logger = logging.getLogger(__name__)

# Shared by every CallStack so ids stay unique across episodes
_frame_ids = itertools.count(1)


class CallStack:
    """Strict LIFO record of active frames. The last element is the top."""

    def __init__(self, max_depth: Optional[int] = None):
        """Create an empty call stack.

        Args:
            max_depth: Maximum number of frames allowed at once (None for no limit)
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        self.max_depth = max_depth
        self._frames: List[Frame] = []
        self.outcomes: List[Outcome] = []
        self.crash: Optional[Unhandled] = None

    def push(self, name: str, handles_errors: bool = False) -> Frame:
        """Create a new frame with a fresh id and put it on top."""
        if self.crash is not None:
            raise EpisodeTerminated(f"cannot push {name}: {self.crash.describe()}")
        if self.max_depth is not None and len(self._frames) >= self.max_depth:
            raise StackOverflow(depth=len(self._frames))
        frame = Frame(name=name, handles_errors=handles_errors, id=next(_frame_ids))
        self._frames.append(frame)
        logger.debug("push %s#%d (depth %d)", frame.name, frame.id, len(self._frames))
        return frame

    def pop(self) -> Frame:
        """Remove and return the top frame."""
        if not self._frames:
            raise StackUnderflow()
        frame = self._frames.pop()
        logger.debug("pop %s#%d (depth %d)", frame.name, frame.id, len(self._frames))
        return frame

    def peek_from_top(self) -> Iterator[Frame]:
        """Yield frames from top to bottom without touching the stack.

        Every call starts a new pass over the current frames.
        """
        for index in range(len(self._frames) - 1, -1, -1):
            yield self._frames[index]

    def record(self, outcome: Outcome) -> None:
        """Remember the outcome of a raise made on this stack.

        An ``Unhandled`` outcome ends the episode; later pushes are refused.
        """
        self.outcomes.append(outcome)
        if isinstance(outcome, Unhandled) and self.crash is None:
            self.crash = outcome

    @property
    def crashed(self) -> bool:
        return self.crash is not None

    def is_empty(self) -> bool:
        return not self._frames

    @property
    def top(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    def clear(self) -> List[Frame]:
        """Drop every frame at once, returning them top first."""
        dropped = list(reversed(self._frames))
        self._frames.clear()
        return dropped

    @contextmanager
    def frame(self, name: str, handles_errors: bool = False) -> Iterator[Frame]:
        """Push a frame for the duration of a ``with`` block.

        The frame is popped on normal exit unless something already
        unwound it (a handled or unhandled raise). A simulator error
        escaping the block is fatal to the episode, so the stack is left
        as it was when the error happened.
        """
        frame = self.push(name, handles_errors)
        try:
            yield frame
        except SimulatorError as e:
            logger.warning(
                "%s escaped frame %s#%d; leaving %d frame(s) in place",
                e.name, frame.name, frame.id, len(self._frames),
            )
            raise
        if self.top is frame:
            self.pop()
        elif frame in self:
            raise SimulatorError(
                f"frame {frame.name}#{frame.id} exited with {self.top} still above it"
            )

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        """Iterate bottom to top."""
        return iter(list(self._frames))

    def __contains__(self, item: Union[Frame, int]) -> bool:
        frame_id = item if isinstance(item, int) else item.id
        return any(f.id == frame_id for f in self._frames)

    def __repr__(self) -> str:
        names = ", ".join(f.name for f in self._frames)
        return f"CallStack([{names}])"
