"""discrete_event: a discrete event simulation scheduler.

Core Objects: EventQueue, Simulation, and SharesEventQueue.
"""

import datetime

import discrete_event.time as time
from discrete_event.event_queue import EventQueue
from discrete_event.exceptions import (
    DiscreteEventError,
    DoubleRecurrenceError,
    FakeRandomExhaustedError,
    MissingCallbackError,
    OutOfOrderSchedulingError,
    ReentrantDispatchError,
    StopSimulation,
)
from discrete_event.random_source import (
    FakeRandom,
    RandomSource,
    fake_random,
    fake_random_for,
    undo_fake_random,
)
from discrete_event.shared import SharesEventQueue
from discrete_event.simulation import Simulation
from discrete_event.time import Event

__all__ = [
    "DiscreteEventError",
    "DoubleRecurrenceError",
    "Event",
    "EventQueue",
    "FakeRandom",
    "FakeRandomExhaustedError",
    "MissingCallbackError",
    "OutOfOrderSchedulingError",
    "RandomSource",
    "ReentrantDispatchError",
    "SharesEventQueue",
    "Simulation",
    "StopSimulation",
    "fake_random",
    "fake_random_for",
    "time",
    "undo_fake_random",
]

__title__ = "discrete_event"
__version__ = "1.1.0"
__license__ = "Apache 2.0"
_this_year = datetime.datetime.now(tz=datetime.UTC).date().year
__copyright__ = f"Copyright {_this_year} discrete_event developers"
