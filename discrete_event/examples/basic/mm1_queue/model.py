"""
M/M/1 Queue
===========

A single-server queue with Poisson arrivals and exponentially distributed service
times. Customers are served in first-come-first-served order. Every random delay is
drawn as ``-ln(U) / rate`` from the simulation's random source, so a FakeRandom that
returns ``1 / e**x`` makes the corresponding delay exactly ``x / rate``.
"""

from __future__ import annotations

import dataclasses
import math
from collections import deque
from dataclasses import dataclass

import numpy as np
import pandas as pd

from discrete_event import Simulation


@dataclass(frozen=True, slots=True)
class MM1Scenario:
    """Parameters for the M/M/1 queue.

    Attributes:
        arrival_rate: Mean number of arrivals per unit time
        service_rate: Mean number of service completions per unit time
    """

    arrival_rate: float = 0.5
    service_rate: float = 1.0

    def __post_init__(self):
        """Validate scenario parameters."""
        if self.arrival_rate <= 0:
            raise ValueError(f"arrival_rate must be > 0, got {self.arrival_rate}")
        if self.service_rate <= 0:
            raise ValueError(f"service_rate must be > 0, got {self.service_rate}")


@dataclass(slots=True)
class Customer:
    """A customer and the times at which things happened to it."""

    arrival_time: float
    queue_on_arrival: int
    service_begin: float | None = None
    service_end: float | None = None


class MM1Queue(Simulation):
    """A single-server queue.

    Attributes:
        arrival_rate (float): Mean number of arrivals per unit time
        service_rate (float): Mean number of service completions per unit time
        system (deque[Customer]): Customers in the system; the first one is in service
        served (list[Customer]): Customers that have left the system, in order
    """

    def __init__(self, scenario=None, *, seed=None, random=None):
        """Initialize the model.

        Args:
            scenario: MM1Scenario object containing model parameters.
            seed: seed for the default random source
            random: random source to use instead of the default
        """
        if scenario is None:
            scenario = MM1Scenario()

        super().__init__(seed=seed, random=random)

        self.arrival_rate = scenario.arrival_rate
        self.service_rate = scenario.service_rate
        self.system: deque[Customer] = deque()
        self.served: list[Customer] = []

    def rand_exp(self, rate: float) -> float:
        """Sample from the exponential distribution with the given rate."""
        return -math.log(self.random.random()) / rate

    @property
    def queue_length(self) -> int:
        """Number of customers waiting, not counting the one in service."""
        return max(len(self.system) - 1, 0)

    def new_customer(self):
        """Schedule the next arrival; each arrival schedules the one after it."""

        def arrive():
            self.system.append(Customer(self.now, self.queue_length))
            if len(self.system) == 1:
                self.serve_customer()
            self.new_customer()

        self.schedule_after(self.rand_exp(self.arrival_rate), arrive)

    def serve_customer(self):
        """Begin service for the customer at the front of the queue."""
        self.system[0].service_begin = self.now

        def depart():
            customer = self.system.popleft()
            customer.service_end = self.now
            self.served.append(customer)
            if self.system:
                self.serve_customer()

        self.schedule_after(self.rand_exp(self.service_rate), depart)

    def start(self):
        self.new_customer()

    def reset(self):
        self.system.clear()
        self.served.clear()
        return super().reset()

    def served_frame(self) -> pd.DataFrame:
        """Return the served customers as a DataFrame, with their waiting time."""
        columns = [field.name for field in dataclasses.fields(Customer)]
        df = pd.DataFrame(
            [dataclasses.astuple(customer) for customer in self.served],
            columns=columns,
        )
        df["waiting_time"] = df["service_begin"] - df["arrival_time"]
        return df


def mm1_queue_demo(
    arrival_rate: float, service_rate: float, num_customers: int, seed=None
) -> tuple[float, float, float, float]:
    """Run the queue until num_customers are served and compare with theory.

    Args:
        arrival_rate: mean number of arrivals per unit time
        service_rate: mean number of service completions per unit time
        num_customers: number of customers to serve
        seed: seed for the random source

    Returns:
        observed mean queue length, expected mean queue length, observed mean waiting
        time, and expected mean waiting time

    Raises:
        ValueError: if the queue is unstable (arrival_rate >= service_rate)

    """
    if arrival_rate >= service_rate:
        raise ValueError(
            f"queue is unstable: arrival_rate ({arrival_rate}) must be less than "
            f"service_rate ({service_rate})"
        )

    queue = MM1Queue(MM1Scenario(arrival_rate, service_rate), seed=seed)

    def stop_when_done():
        if len(queue.served) >= num_customers:
            queue.stop()

    queue.run(on_event=stop_when_done)

    queue_lengths = np.array([c.queue_on_arrival for c in queue.served])
    waits = np.array([c.service_begin - c.arrival_time for c in queue.served])

    # by PASTA, arrivals see the time-average queue length
    rho = arrival_rate / service_rate
    expected_queue = rho**2 / (1 - rho)
    expected_wait = rho / (service_rate - arrival_rate)

    return (
        float(queue_lengths.mean()),
        expected_queue,
        float(waits.mean()),
        expected_wait,
    )
