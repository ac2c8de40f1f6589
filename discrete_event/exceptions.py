"""Exceptions and control-flow signals raised by discrete_event.

All errors derive from DiscreteEventError, so callers can catch everything the
scheduler raises on its own behalf with a single ``except`` clause. Errors raised
inside user actions are never wrapped; they propagate unchanged.

StopSimulation is not an error. It derives from BaseException so that generic
``except Exception`` handlers inside actions cannot swallow it by accident.
"""

__all__ = [
    "DiscreteEventError",
    "DoubleRecurrenceError",
    "FakeRandomExhaustedError",
    "MissingCallbackError",
    "OutOfOrderSchedulingError",
    "ReentrantDispatchError",
    "StopSimulation",
]


class DiscreteEventError(Exception):
    """Base class for all errors raised by the scheduler."""


class OutOfOrderSchedulingError(DiscreteEventError, ValueError):
    """Raised when an event is scheduled at a time before the current time."""

    def __init__(self, time, now):
        """Initialize the error.

        Args:
            time: the requested event time
            now: the current time of the event queue
        """
        super().__init__(
            f"cannot schedule event in the past: time ({time}) is before now ({now})"
        )
        self.time = time
        self.now = now


class DoubleRecurrenceError(DiscreteEventError, RuntimeError):
    """Raised when an action requests recurrence more than once."""


class ReentrantDispatchError(DiscreteEventError, RuntimeError):
    """Raised when an action tries to dispatch events itself."""


class MissingCallbackError(DiscreteEventError, TypeError):
    """Raised when at_each is called without an action."""


class FakeRandomExhaustedError(DiscreteEventError, RuntimeError):
    """Raised when a FakeRandom has no values left."""


class StopSimulation(BaseException):  # noqa: N818
    """Cooperative signal that ends Simulation.run.

    Raise it from inside an action (or from the ``on_event`` callback) to make
    the enclosing run loop return normally. Events that are still pending stay
    in the queue, so a later ``run`` resumes from where the loop stopped.
    """
