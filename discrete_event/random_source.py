"""Random number sources, and a harness that fakes them in tests.

Simulation code draws random numbers from an injected source (by convention the
``random`` attribute of the simulated object) rather than from the global ``random``
module. Any object with ``random()`` and ``randrange(n)`` methods will do, so
``random.Random`` works out of the box.

Testing with a fixed seed tells you little about *why* a simulation produced a given
result. FakeRandom instead replays a short list of hand-picked values, so you can pick
numbers that produce particular behavior:

    foo = Foo()                      # foo.random is a random.Random
    fake_random_for(foo, 0.0, 0.1)
    foo.random.random()              # 0.0
    foo.random.random()              # 0.1
    foo.random.random()              # raises FakeRandomExhaustedError
    undo_fake_random(foo)            # foo.random is the original source again

Fakes are installed per instance, so each object in a simulation gets its own
sequence, which is usually easier than specifying one sequence for the whole thing.
"""

from __future__ import annotations

import contextlib
import math
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from discrete_event.exceptions import FakeRandomExhaustedError

__all__ = [
    "FakeRandom",
    "RandomSource",
    "fake_random",
    "fake_random_for",
    "undo_fake_random",
]

_MISSING = object()


@runtime_checkable
class RandomSource(Protocol):
    """The random number operations that simulations rely on."""

    def random(self) -> float:
        """Return the next uniform value in [0, 1)."""
        ...

    def randrange(self, n: int) -> int:
        """Return the next integer in [0, n)."""
        ...


class FakeRandom:
    """A random source that returns a fixed, finite sequence of values.

    Attributes:
        original: The source this fake replaced, if it was installed with
            fake_random_for

    """

    def __init__(self, values: Iterable[float]) -> None:
        """Initialize a fake random source.

        Args:
            values: the values to return, in order
        """
        self._values = deque(values)
        self.original = _MISSING

    @property
    def remaining(self) -> int:
        """Return the number of values left."""
        return len(self._values)

    def _next(self) -> float:
        if not self._values:
            raise FakeRandomExhaustedError("out of fake random numbers")
        return self._values.popleft()

    def random(self) -> float:
        """Return the next value as is."""
        return self._next()

    def randrange(self, n: int) -> int:
        """Return the next value scaled to an integer in [0, n), as ``floor(value * n)``.

        Raises:
            ValueError: if n is not positive, as random.Random.randrange does

        """
        if n <= 0:
            raise ValueError(f"empty range for randrange({n})")
        return math.floor(self._next() * n)

    def __repr__(self) -> str:  # noqa
        return f"FakeRandom(remaining={self.remaining})"


def fake_random_for(obj, *values: float, attribute: str = "random") -> FakeRandom:
    """Make obj draw the given values from its random source.

    If obj already has a fake installed, it is undone first.

    Args:
        obj: the object whose random source to replace
        values: the values to return, in order
        attribute: the name of the attribute holding the random source

    Returns:
        FakeRandom: the installed fake

    """
    undo_fake_random(obj, attribute=attribute)

    fake = FakeRandom(values)
    fake.original = vars(obj).get(attribute, _MISSING)
    setattr(obj, attribute, fake)
    return fake


def undo_fake_random(obj, attribute: str = "random") -> None:
    """Reverse the effects of fake_random_for.

    If obj had its own random source, it is restored; otherwise the override is
    removed and obj goes back to whatever its class provides. Does nothing if no
    fake is installed.

    Args:
        obj: the object to restore
        attribute: the name of the attribute holding the random source

    """
    fake = vars(obj).get(attribute)
    if not isinstance(fake, FakeRandom):
        return

    if fake.original is _MISSING:
        delattr(obj, attribute)
    else:
        setattr(obj, attribute, fake.original)


@contextlib.contextmanager
def fake_random(obj, *values: float, attribute: str = "random") -> Iterator[FakeRandom]:
    """Context manager version of fake_random_for.

    Args:
        obj: the object whose random source to replace
        values: the values to return, in order
        attribute: the name of the attribute holding the random source

    """
    fake = fake_random_for(obj, *values, attribute=attribute)
    try:
        yield fake
    finally:
        undo_fake_random(obj, attribute=attribute)
