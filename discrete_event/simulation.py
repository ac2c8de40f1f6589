"""A simulation: an event queue with a start hook and a run loop.

Typically you subclass Simulation, override start to schedule the first events, and
call run. The run loop dispatches events until the queue is empty or an action raises
StopSimulation (see Simulation.stop), which is the sanctioned way to end a simulation
that has periodic events and would otherwise run forever.

Simulation can also be used on its own as a standalone event queue.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator
from random import Random
from typing import TYPE_CHECKING

from discrete_event.event_queue import EventQueue
from discrete_event.exceptions import StopSimulation
from discrete_event.shared import SharesEventQueue

if TYPE_CHECKING:
    from discrete_event.random_source import RandomSource
    from discrete_event.time import Event

__all__ = ["Simulation"]


class Simulation(SharesEventQueue):
    """A simulation, including an event queue, the current time, and a random source.

    Attributes:
        start_time (int | float): The time at which the simulation starts and resets to
        event_queue (EventQueue): The queue of pending events
        random (RandomSource): The source of random numbers for the simulation

    """

    def __init__(
        self,
        start_time: int | float = 0.0,
        *,
        seed: int | None = None,
        random: RandomSource | None = None,
    ) -> None:
        """Initialize a simulation.

        Args:
            start_time: the start time of the simulation
            seed: the seed for the default random source; ignored if random is given
            random: the random source to use instead of ``random.Random(seed)``
        """
        self.start_time = start_time
        self.event_queue = EventQueue(start_time)
        self.random: RandomSource = Random(seed) if random is None else random

    def start(self) -> None:
        """Schedule the first events; called by run when no events are pending.

        You will probably want to override this.
        """

    def run(self, on_event: Callable[[], object] | None = None) -> None:
        """Run (or continue) the simulation until it stops or there are no more events.

        If no events are pending, start is called first. A StopSimulation raised by an
        action or by on_event ends the run normally; the remaining events stay pending.

        Args:
            on_event: called with no arguments after each event runs

        """
        if len(self.event_queue) == 0:
            self.start()

        with contextlib.suppress(StopSimulation):
            while self.event_queue.run_next():
                if on_event is not None:
                    on_event()

    def stop(self) -> None:
        """Stop the enclosing run loop.

        Raises:
            StopSimulation: always

        """
        raise StopSimulation

    def reset(self) -> Simulation:
        """Clear any pending events and reset now to the start time.

        You may want to extend this to reset your simulation-specific state as well.

        Returns:
            Simulation: this simulation, so that ``sim.reset().run()`` works

        """
        self.event_queue.reset(self.start_time)
        return self

    def cancel(self, event: Event) -> None:
        """See EventQueue.cancel."""
        self.event_queue.cancel(event)

    def run_next(self) -> bool:
        """See EventQueue.run_next."""
        return self.event_queue.run_next()

    def run_to(self, time: int | float) -> None:
        """See EventQueue.run_to."""
        self.event_queue.run_to(time)

    def peek_next_time(self) -> int | float | None:
        """See EventQueue.peek_next_time."""
        return self.event_queue.peek_next_time()

    def each(self) -> Iterator[int | float]:
        """See EventQueue.each."""
        return self.event_queue.each()
