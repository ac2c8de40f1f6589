"""Scheduling for objects that share one event queue.

In a simulation made of several independent objects (say, a producer and a consumer),
all of them must use the same clock and the same pending set. Subclass
SharesEventQueue and give each object a reference to the shared EventQueue; the
scheduling methods are then available on the object itself.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from discrete_event.event_queue import EventQueue
    from discrete_event.time import Event

__all__ = ["SharesEventQueue"]


class SharesEventQueue:
    """Base class for objects that schedule events on an externally owned queue.

    Subclasses must provide an ``event_queue`` attribute (or property) holding the
    EventQueue to use. Every method simply forwards to that queue.

    Attributes:
        event_queue (EventQueue): The shared event queue

    """

    event_queue: EventQueue

    @property
    def now(self) -> int | float:
        """Return the current time of the shared queue."""
        return self.event_queue.now

    def schedule_at(self, time: int | float, action: Callable[[], object]) -> Event:
        """See EventQueue.schedule_at."""
        return self.event_queue.schedule_at(time, action)

    def schedule_after(
        self, delay: int | float, action: Callable[[], object]
    ) -> Event:
        """See EventQueue.schedule_after."""
        return self.event_queue.schedule_after(delay, action)

    def at_each(
        self,
        items: MutableSequence,
        time: str | Callable[[Any], int | float] | None = None,
        action: Callable[[Any], object] | None = None,
    ) -> None:
        """See EventQueue.at_each."""
        self.event_queue.at_each(items, time, action)

    def request_recur(self, interval: int | float) -> None:
        """See EventQueue.request_recur."""
        self.event_queue.request_recur(interval)

    def every(
        self,
        interval: int | float,
        action: Callable[[], object],
        start: int | float = 0,
    ) -> Event:
        """See EventQueue.every."""
        return self.event_queue.every(interval, action, start)
