"""Deferred callback scheduling.

Each drained callback runs in its own episode on a brand new call stack,
so handlers that were live when the callback was scheduled are gone by
the time it runs.
"""

import logging
from typing import Callable, List, Optional, Tuple

from .errors import CallbackStateError
from .propagation import PropagationEngine
from .stack import CallStack
from .values import (
    CallbackState,
    Completed,
    DeferredCallback,
    Outcome,
    state_for_outcome,
)

logger = logging.getLogger(__name__)


class AsyncScheduler:
    """FIFO queue of deferred callbacks, run one at a time by ``drain``."""

    def __init__(
        self,
        engine: Optional[PropagationEngine] = None,
        max_depth: Optional[int] = None,
    ):
        self.engine = engine if engine is not None else PropagationEngine()
        self.max_depth = max_depth
        self.episode = 0
        self.history: List[Tuple[DeferredCallback, Outcome]] = []
        self._queue: List[DeferredCallback] = []

    def schedule(self, callback: DeferredCallback) -> DeferredCallback:
        """Queue ``callback`` and return immediately without running it."""
        if callback.state is not CallbackState.SCHEDULED:
            raise CallbackStateError(
                f"{callback.label}: cannot schedule a callback in state {callback.state.name}"
            )
        self._queue.append(callback)
        logger.debug("scheduled %s (queue length %d)", callback.label, len(self._queue))
        return callback

    def defer(
        self,
        action: Callable[[CallStack], Optional[Outcome]],
        origin: Optional[CallStack] = None,
        label: Optional[str] = None,
    ) -> DeferredCallback:
        """Build a callback for ``action`` and schedule it.

        ``origin`` is the stack doing the scheduling; its top frame is
        recorded for diagnostics only.
        """
        top = origin.top if origin is not None else None
        callback = DeferredCallback(
            action=action,
            origin_frame_id=top.id if top is not None else None,
            scheduled_at_episode=self.episode,
            label=label or "",
        )
        return self.schedule(callback)

    def drain(self) -> List[Outcome]:
        """Run every callback queued so far, in order, and return their outcomes.

        Callbacks scheduled while draining wait for the next drain.
        """
        batch = self._queue
        self._queue = []
        outcomes: List[Outcome] = []

        for index, callback in enumerate(batch):
            try:
                outcome = self._run(callback)
            except Exception:
                # Keep the callbacks that never got their turn
                self._queue[:0] = batch[index + 1:]
                raise
            outcomes.append(outcome)

        return outcomes

    def _run(self, callback: DeferredCallback) -> Outcome:
        self.episode += 1
        stack = CallStack(max_depth=self.max_depth)
        callback.advance(CallbackState.EXECUTING)
        logger.debug(
            "episode %d: running %s (scheduled in episode %d under frame %s)",
            self.episode,
            callback.label,
            callback.scheduled_at_episode,
            callback.origin_frame_id,
        )

        returned = callback.action(stack)
        outcome = self._episode_outcome(stack, returned)
        if not stack.is_empty():
            logger.debug(
                "episode %d ended with %d frame(s) left; discarding",
                self.episode,
                len(stack),
            )

        callback.advance(state_for_outcome(outcome))
        self.history.append((callback, outcome))
        return outcome

    def _episode_outcome(self, stack: CallStack, returned: Optional[Outcome]) -> Outcome:
        """Pick the outcome an episode is remembered by.

        A crash wins over anything the action returned. Otherwise the
        action's own result, then its last recorded raise, then ``Completed``.
        """
        if stack.crash is not None:
            if returned is not None and returned != stack.crash:
                logger.warning(
                    "episode %d returned '%s' after crashing with '%s'; keeping the crash",
                    self.episode, returned.describe(), stack.crash.describe(),
                )
            return stack.crash
        if returned is not None:
            return returned
        if stack.outcomes:
            return stack.outcomes[-1]
        return Completed()

    @property
    def pending(self) -> Tuple[DeferredCallback, ...]:
        return tuple(self._queue)

    def __len__(self) -> int:
        return len(self._queue)
