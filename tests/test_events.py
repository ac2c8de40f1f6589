"""Tests for Event and EventHeap."""

from unittest.mock import MagicMock

import pytest

from discrete_event.time import Event, EventHeap


def test_event():
    """Tests for Event class."""
    some_test_function = MagicMock()

    time = 10
    event = Event(time, some_test_function)

    assert event.time == time
    assert event.action is some_test_function

    # execute
    event.execute()
    some_test_function.assert_called_once_with()

    with pytest.raises(TypeError, match="action must be callable"):
        Event(time, None)

    # lambdas are held strongly, so they still run after the name goes away
    log = []
    event = Event(time, lambda: log.append("ran"))
    event.execute()
    assert log == ["ran"]


def test_event_ordering():
    """Events are ordered by time only."""
    fn = MagicMock()

    assert Event(10, fn) > Event(9, fn)
    assert Event(9, fn) < Event(10, fn)

    event1 = Event(10, fn)
    event2 = Event(10, fn)
    assert not event1 < event2
    assert not event2 < event1

    # unique ids are still distinct
    assert event1.unique_id != event2.unique_id
    assert repr(event1) == f"Event(time=10, id={event1.unique_id})"


def test_event_heap():
    """Tests for EventHeap."""
    heap = EventHeap()

    assert len(heap._events) == 0
    assert isinstance(heap._events, list)
    assert heap.is_empty()

    # push
    some_test_function = MagicMock()
    event = Event(1, some_test_function)
    heap.push(event)
    assert len(heap) == 1
    assert event in heap
    assert Event(1, some_test_function) not in heap  # identity, not value

    # peek does not remove
    assert heap.peek() is event
    assert len(heap) == 1

    # pop
    assert heap.pop() is event
    assert heap.is_empty()

    with pytest.raises(IndexError):
        heap.pop()
    with pytest.raises(IndexError):
        heap.peek()
    with pytest.raises(IndexError):
        heap.replace_top(event)

    # pop returns events in time order
    heap = EventHeap()
    times = [5.0, 15.0, 10.0, 25.0, 20.0, 8.0]
    for t in times:
        heap.push(Event(t, some_test_function))
    assert [heap.pop().time for _ in times] == sorted(times)

    # clear
    heap.push(Event(1, some_test_function))
    heap.clear()
    assert len(heap) == 0


def test_event_heap_peek_ahead():
    """peek_ahead returns events in chronological order."""
    some_test_function = MagicMock()
    heap = EventHeap()
    times = [5.0, 15.0, 10.0, 25.0, 20.0, 8.0]
    for t in times:
        heap.push(Event(t, some_test_function))

    events = heap.peek_ahead(5)
    assert [e.time for e in events] == sorted(times)[:5]
    assert len(heap) == len(times)

    events = heap.peek_ahead(10)
    assert len(events) == len(times)

    with pytest.raises(IndexError):
        EventHeap().peek_ahead()


def test_event_heap_replace_top():
    """replace_top gives the same order as pop followed by push."""
    fn = MagicMock()
    heap = EventHeap()
    for t in [1, 3, 5, 7]:
        heap.push(Event(t, fn))

    top = heap.peek()
    top.time = 6
    assert heap.replace_top(top) is top

    assert [heap.pop().time for _ in range(4)] == [3, 5, 6, 7]

    # replacing with a different event
    heap = EventHeap()
    first = Event(1, fn)
    heap.push(first)
    heap.push(Event(2, fn))
    replacement = Event(4, fn)
    assert heap.replace_top(replacement) is first
    assert first not in heap
    assert replacement in heap
    assert heap.peek().time == 2


def test_event_heap_repr():
    """The repr lists events in time order."""
    fn = MagicMock()
    heap = EventHeap()
    late = Event(2, fn)
    early = Event(1, fn)
    heap.push(late)
    heap.push(early)
    assert repr(heap) == (
        f"EventHeap([Event(time=1, id={early.unique_id}), "
        f"Event(time=2, id={late.unique_id})])"
    )
