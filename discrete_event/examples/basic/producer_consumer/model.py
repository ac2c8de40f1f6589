"""
Producer and Consumer
=====================

Two small simulations used throughout the tests.

ConsumerSim is a self-contained Simulation that consumes a set number of random
numbers at random intervals. Producer and Consumer are independent objects that share
one EventQueue: the producer hands objects to the consumer at random intervals, and the
consumer takes a random amount of time to consume each one.
"""

from __future__ import annotations

from random import Random

from discrete_event import EventQueue, SharesEventQueue, Simulation


class ConsumerSim(Simulation):
    """Consumes and records ``limit`` random numbers at random intervals.

    Attributes:
        limit (int): The number of values to consume
        consumed (list[float]): The times at which values were consumed
    """

    def __init__(self, limit: int, start_time: float = 0.0, *, seed=None):
        """Initialize the simulation.

        Args:
            limit: the number of values to consume
            start_time: the start time of the simulation
            seed: seed for the default random source
        """
        super().__init__(start_time, seed=seed)
        self.limit = limit
        self.consumed: list[float] = []

    def consume(self):
        if len(self.consumed) < self.limit:

            def record():
                self.consumed.append(self.now)
                self.consume()

            self.schedule_after(self.random.random(), record)

    def start(self):
        self.consume()

    def reset(self):
        self.consumed.clear()
        return super().reset()


class Consumer(SharesEventQueue):
    """Consumes objects after a random delay, on a shared event queue."""

    def __init__(self, event_queue: EventQueue, random=None):
        """Initialize a consumer.

        Args:
            event_queue: the queue shared with the producer
            random: random source; defaults to a new random.Random
        """
        self.event_queue = event_queue
        self.random = Random() if random is None else random
        self.consumed: list = []

    def consume(self, obj):
        """Consume obj after a random delay."""
        self.schedule_after(self.random.random(), lambda: self.consumed.append(obj))


class Producer(SharesEventQueue):
    """Hands objects to a consumer at random intervals, on a shared event queue."""

    def __init__(
        self, event_queue: EventQueue, objects: list, consumer: Consumer, random=None
    ):
        """Initialize a producer.

        Args:
            event_queue: the queue shared with the consumer
            objects: the objects to produce, in order; consumed from the front
            consumer: the consumer to hand the objects to
            random: random source; defaults to a new random.Random
        """
        self.event_queue = event_queue
        self.objects = objects
        self.consumer = consumer
        self.random = Random() if random is None else random

    def produce(self):
        """Produce the next object after a random delay, until none are left."""
        if not self.objects:
            return

        def hand_over():
            self.consumer.consume(self.objects.pop(0))
            self.produce()

        self.schedule_after(self.random.random(), hand_over)
