"""Core event data structures for discrete_event's scheduler.

This module provides the two leaf components of the scheduler:

- Event: a single scheduled action, pairing a time with a zero-argument callable
- EventHeap: a heap queue of pending events ordered solely by time

Events are compared by time only. Two events may share a time, and the order in
which equal-time events leave the heap is an artifact of the heap layout; it is not
first-in-first-out and should not be relied upon.

Cancellation never looks at the contents of an event. An Event object is its own
handle, and the heap matches handles by identity (``is``), so two events with the
same time and the same action are never confused with one another.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from heapq import heapify, heappop, heappush, heapreplace, nsmallest


class Event:
    """A scheduled action.

    Attributes:
        time (int | float): The simulation time at which the action runs
        action (Callable): The zero-argument callable to invoke
        unique_id (int): A process-wide counter value, used for display only

    Notes:
        Use functools.partial to bind arguments to the action. Unlike a weakref
        based event, the action is held by a strong reference, so lambdas and
        closures are fine.

    """

    __slots__ = ("action", "time", "unique_id")

    _ids = itertools.count()

    def __init__(self, time: int | float, action: Callable[[], object]) -> None:
        """Initialize an event.

        Args:
            time: the instant of time of the event
            action: the callable to invoke

        Raises:
            TypeError: if action is not callable
        """
        if not callable(action):
            raise TypeError(f"action must be callable, got {action!r}")

        self.time = time
        self.action = action
        self.unique_id = next(self._ids)

    def execute(self):
        """Execute this event."""
        self.action()

    def __lt__(self, other):  # noqa
        return self.time < other.time

    def __repr__(self) -> str:  # noqa
        return f"Event(time={self.time}, id={self.unique_id})"


class EventHeap:
    """A min-time heap of events.

    This is a heap queue sorted on event time. Events are always removed from the
    root, so heapq is a performant and appropriate data structure. Besides the usual
    push and pop, the heap offers replace_top, which overwrites the root with a new
    event and sifts it down. For an event that is rescheduled right after it ran this
    yields the same heap as a pop followed by a push, but does half the work.

    """

    def __init__(self):
        """Initialize an empty heap."""
        self._events: list[Event] = []
        heapify(self._events)

    def push(self, event: Event) -> None:
        """Add the event to the heap.

        Args:
            event (Event): The event to be added

        """
        heappush(self._events, event)

    def pop(self) -> Event:
        """Remove and return the earliest event.

        Raises:
            IndexError: If the heap is empty

        """
        if not self._events:
            raise IndexError("event heap is empty")
        return heappop(self._events)

    def peek(self) -> Event:
        """Return the earliest event without removing it.

        Raises:
            IndexError: If the heap is empty

        """
        if not self._events:
            raise IndexError("event heap is empty")
        return self._events[0]

    def replace_top(self, event: Event) -> Event:
        """Overwrite the root with the given event and restore the heap invariant.

        Args:
            event (Event): The event that takes the place of the current root

        Returns:
            Event: the event that was at the root

        Raises:
            IndexError: If the heap is empty

        """
        if not self._events:
            raise IndexError("event heap is empty")
        return heapreplace(self._events, event)

    def peek_ahead(self, n: int = 1) -> list[Event]:
        """Look at the first n events in time order.

        Args:
            n (int): The number of events to look ahead

        Returns:
            list[Event]

        Raises:
            IndexError: If the heap is empty

        Notes:
            this method returns a list shorter than n if the heap holds fewer
            than n events.

        """
        if self.is_empty():
            raise IndexError("event heap is empty")
        return nsmallest(n, self._events)

    def is_empty(self) -> bool:
        """Return whether the heap is empty."""
        return len(self) == 0

    def clear(self):
        """Remove all events from the heap."""
        self._events.clear()

    def __contains__(self, event: Event) -> bool:  # noqa
        return any(e is event for e in self._events)

    def __iter__(self) -> Iterator[Event]:  # noqa
        # heap order, not time order
        return iter(self._events)

    def __len__(self) -> int:  # noqa
        return len(self._events)

    def __repr__(self) -> str:
        """Return a string representation of the heap."""
        events_str = ", ".join(
            f"Event(time={e.time}, id={e.unique_id})" for e in sorted(self._events)
        )
        return f"EventHeap([{events_str}])"
