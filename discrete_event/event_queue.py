"""The event queue: a clock plus a heap of pending events.

There are two key terms:

- action: any zero-argument callable
- event: an action to be executed at some specified time in the future

Events are usually created with schedule_at and schedule_after. The methods at_each,
every and request_recur make some important special cases more efficient: at_each
keeps a single pending event for a whole time-ordered batch, and request_recur lets
the running action put itself back on the heap without a separate pop and push.

Dispatch works as follows. run_next takes the earliest event, advances the clock to its
time and calls its action. The running event stays in the root slot of the heap while
its action runs, but it is no longer pending: everything that inspects the pending set
(peek_next_time, cancel, len, ...) first drops it from the heap. Scheduling does not
need to, because nothing can be scheduled before now, so a new event never displaces
the root. If the action asks to recur and the root is still in place, the event's new
time is written into the root and sifted down, which is a heap increase-key at the
root.
"""

from __future__ import annotations

import warnings
from collections import deque
from collections.abc import Callable, Iterator, MutableSequence
from operator import attrgetter
from typing import Any

from discrete_event.exceptions import (
    DoubleRecurrenceError,
    MissingCallbackError,
    OutOfOrderSchedulingError,
    ReentrantDispatchError,
)
from discrete_event.time import Event, EventHeap

__all__ = ["EventQueue"]


def _noop():
    pass


def _time_getter(time: str | Callable[[Any], int | float] | None):
    if time is None:
        return attrgetter("time")
    if isinstance(time, str):
        return attrgetter(time)
    if callable(time):
        return time
    raise TypeError(
        f"time must be None, an attribute name, or a callable, got {time!r}"
    )


def _shift(items: MutableSequence) -> Any:
    if isinstance(items, deque):
        return items.popleft()
    return items.pop(0)


class EventQueue:
    """Queue of pending events; also keeps track of the clock.

    Attributes:
        now (int | float): The current time, taken from the most recently dispatched event
        events (EventHeap): The heap of pending events; usually you shouldn't change this

    """

    def __init__(self, now: int | float = 0.0):
        """Initialize an event queue.

        Args:
            now: the start time; you can use floating point or integer time
        """
        self._now = now
        self._events = EventHeap()
        self._recur_interval: int | float | None = None
        self._current: Event | None = None
        self._running_at_root = False

    @property
    def now(self) -> int | float:
        """Return the current time."""
        return self._now

    @property
    def events(self) -> EventHeap:
        """Return the heap of pending events."""
        self._release_root()
        return self._events

    @property
    def is_dispatching(self) -> bool:
        """Return whether an action is currently running."""
        return self._current is not None

    def _check_not_dispatching(self) -> None:
        if self._current is not None:
            raise ReentrantDispatchError(
                "cannot dispatch events from within a running action"
            )

    def _release_root(self) -> None:
        # the running event still occupies the root of the heap
        if self._running_at_root:
            self._events.pop()
            self._running_at_root = False

    def schedule_at(self, time: int | float, action: Callable[[], object]) -> Event:
        """Schedule action to run at the given time.

        Args:
            time (int | float): the time at which action should run; must be >= now
            action (Callable): the zero-argument callable to run

        Returns:
            Event: a handle that can be passed to cancel

        Raises:
            OutOfOrderSchedulingError: if time is before now

        """
        if time < self._now:
            raise OutOfOrderSchedulingError(time, self._now)

        event = Event(time, action)
        self._events.push(event)
        return event

    def schedule_after(
        self, delay: int | float, action: Callable[[], object]
    ) -> Event:
        """Schedule action to run after the given delay, relative to now.

        Args:
            delay (int | float): the delay after which action should run; non-negative
            action (Callable): the zero-argument callable to run

        Returns:
            Event: a handle that can be passed to cancel

        """
        return self.schedule_at(self._now + delay, action)

    def cancel(self, event: Event) -> None:
        """Cancel an event previously created with schedule_at or schedule_after.

        Cancelling an event that has already run, or that is running right now, has
        no effect.

        Args:
            event (Event): the handle of the event to cancel

        """
        self._release_root()

        # pop everything up to the target's time; there is no index from handle to
        # heap slot, so this is linear in the number of earlier events
        set_aside = []
        while not self._events.is_empty() and self._events.peek().time <= event.time:
            candidate = self._events.pop()
            if candidate is event:
                break
            set_aside.append(candidate)

        for candidate in set_aside:
            self._events.push(candidate)

    def at_each(
        self,
        items: MutableSequence,
        time: str | Callable[[Any], int | float] | None = None,
        action: Callable[[Any], object] | None = None,
    ) -> None:
        """Schedule action to run once for each item, at a time given by the item.

        This is of interest if you have a large number of events that occur at known
        times. You could use schedule_at to add each one to the queue up front, but
        that makes every other scheduling call more expensive. Instead, the items are
        scheduled one at a time, so only the next one is ever pending.

        Args:
            items: items to pass to action, in ascending time order; items are removed
                from the front as they are scheduled, so pass a copy if you need to keep
                the original
            time: how to get the time of an item; None reads ``item.time``, a string
                names the attribute to read, and a callable is called with the item
            action: the callable to run; it receives the item as its only argument

        Raises:
            MissingCallbackError: if no action is given
            TypeError: if time is not None, a string, or a callable

        Notes:
            The items are not sorted. If an item's time is before the time of the item
            preceding it, scheduling it raises OutOfOrderSchedulingError once its
            predecessor has run.

        """
        if action is None:
            raise MissingCallbackError("at_each requires an action")
        time_of = _time_getter(time)

        if not items:
            return

        item = _shift(items)

        def run_item():
            action(item)
            self.at_each(items, time, action)

        self.schedule_at(time_of(item), run_item)

    def request_recur(self, interval: int | float) -> None:
        """Run the currently executing action again after the given interval.

        This may be called at most once per action invocation. Calling it while no
        action is running has no effect and emits a RuntimeWarning.

        Args:
            interval (int | float): the interval after which to rerun; non-negative

        Raises:
            DoubleRecurrenceError: if the running action already requested recurrence
            OutOfOrderSchedulingError: if interval is negative

        """
        if self._current is None:
            warnings.warn(
                "request_recur called while no action is running; ignored",
                RuntimeWarning,
                stacklevel=2,
            )
            return
        if self._recur_interval is not None:
            raise DoubleRecurrenceError(
                "cannot recur twice from the same action invocation"
            )
        if interval < 0:
            raise OutOfOrderSchedulingError(self._now + interval, self._now)

        self._recur_interval = interval

    def every(
        self,
        interval: int | float,
        action: Callable[[], object],
        start: int | float = 0,
    ) -> Event:
        """Schedule action to run periodically.

        Note that a periodic action means the queue never runs out of events. Raise
        StopSimulation from an action (or stop otherwise) to end the run.

        Args:
            interval (int | float): the time between runs; non-negative
            action (Callable): the zero-argument callable to run
            start (int | float): the time of the first run

        Returns:
            Event: a handle for the series; cancelling it stops all future runs

        """

        def recurring():
            action()
            self.request_recur(interval)

        return self.schedule_at(start, recurring)

    def peek_next_time(self) -> int | float | None:
        """Return the time of the next pending event, or None if there is none.

        When called from within an action, the running event does not count: the
        result is the time of the event after it.
        """
        self._release_root()
        if self._events.is_empty():
            return None
        return self._events.peek().time

    def peek_ahead(self, n: int = 1) -> list[Event]:
        """Return the first n pending events in time order.

        Raises:
            IndexError: If there are no pending events

        """
        self._release_root()
        return self._events.peek_ahead(n)

    def run_next(self) -> bool:
        """Run the action of the next event in the queue.

        Returns:
            bool: False if there were no more events

        Raises:
            ReentrantDispatchError: if called from within an action

        """
        self._check_not_dispatching()
        if self._events.is_empty():
            return False

        event = self._events.peek()
        self._now = event.time
        self._current = event
        self._running_at_root = True

        try:
            event.execute()

            if self._recur_interval is not None:
                event.time = self._now + self._recur_interval
                if self._running_at_root:
                    self._events.replace_top(event)
                    self._running_at_root = False
                else:
                    self._events.push(event)
        finally:
            self._release_root()
            self._recur_interval = None
            self._current = None

        return True

    def run_to(self, time: int | float) -> None:
        """Run events until the given time, inclusive.

        When this method returns, now is time, and all events scheduled at times up to
        and including time have run. A time before now is ignored with a
        RuntimeWarning.

        Args:
            time (int | float): the time to run to

        Raises:
            ReentrantDispatchError: if called from within an action

        """
        self._check_not_dispatching()
        if time < self._now:
            warnings.warn(
                f"run_to({time}) ignored: time is before now ({self._now})",
                RuntimeWarning,
                stacklevel=2,
            )
            return

        # make sure the clock stops exactly at time, even if no event is there
        self.schedule_at(time, _noop)
        while (next_time := self.peek_next_time()) is not None and next_time <= time:
            self.run_next()

    def each(self) -> Iterator[int | float]:
        """Run events one at a time, yielding now after each one.

        Note that this iterator never ends if there are periodic events.
        """
        while self.run_next():
            yield self._now

    def reset(self, now: int | float = 0.0) -> EventQueue:
        """Clear all pending events and reset now.

        Args:
            now (int | float): the new current time

        Returns:
            EventQueue: this queue

        """
        self._events.clear()
        self._running_at_root = False
        self._now = now
        return self

    def __contains__(self, event: Event) -> bool:  # noqa
        self._release_root()
        return event in self._events

    def __len__(self) -> int:  # noqa
        return len(self._events) - self._running_at_root

    def __repr__(self) -> str:
        """Return a string representation of the event queue."""
        return f"EventQueue(now={self._now}, pending={len(self)})"
