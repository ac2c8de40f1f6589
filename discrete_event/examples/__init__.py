"""Example simulations built on discrete_event."""

from discrete_event.examples.basic.mm1_queue.model import (
    MM1Queue,
    MM1Scenario,
    mm1_queue_demo,
)
from discrete_event.examples.basic.producer_consumer.model import (
    Consumer,
    ConsumerSim,
    Producer,
)

__all__ = [
    "Consumer",
    "ConsumerSim",
    "MM1Queue",
    "MM1Scenario",
    "Producer",
    "mm1_queue_demo",
]
