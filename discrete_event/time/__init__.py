"""Underlying data structures for event scheduling.

This package provides the leaf components of the scheduler. The EventHeap class is a
priority queue that keeps pending events in chronological order. Key features:

- Ordering on event time only
- Identity-based membership, so events that share a time are never confused
- In-place root replacement for events that are rescheduled right after they run
"""

from .events import Event, EventHeap

__all__ = ["Event", "EventHeap"]
