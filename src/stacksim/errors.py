"""Simulator error types and exceptions.

These are host-level failures of the simulator itself. Simulated errors
(the ones frames raise and handlers catch) are plain values, see
``values.RaisedError``.
"""


class SimulatorError(Exception):
    """Base class for all simulator errors."""

    def __init__(self, message: str = "", name: str = "SimulatorError"):
        self.message = message
        self.name = name
        super().__init__(f"{name}: {message}" if message else name)


class StackUnderflow(SimulatorError):
    """Pop called on an empty call stack."""

    def __init__(self, message: str = "pop from empty call stack"):
        super().__init__(message, "StackUnderflow")


class StackOverflow(SimulatorError):
    """Push would exceed the configured maximum depth."""

    def __init__(self, message: str = "Maximum call stack size exceeded", depth: int = 0):
        self.depth = depth
        super().__init__(message, "StackOverflow")


class CallbackStateError(SimulatorError):
    """Illegal state transition on a deferred callback."""

    def __init__(self, message: str = ""):
        super().__init__(message, "CallbackStateError")


class EpisodeTerminated(SimulatorError):
    """Push onto a call stack whose episode already crashed."""

    def __init__(self, message: str = "episode already terminated by an uncaught error"):
        super().__init__(message, "EpisodeTerminated")
