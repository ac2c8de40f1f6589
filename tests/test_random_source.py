"""Tests for the random source protocol and the FakeRandom harness."""

from random import Random

import pytest

from discrete_event import (
    FakeRandom,
    FakeRandomExhaustedError,
    RandomSource,
    fake_random,
    fake_random_for,
    undo_fake_random,
)
from discrete_event.examples import ConsumerSim


class Dice:
    """Rolls a die with whatever random source it has."""

    def __init__(self):
        self.random = Random(1)

    def roll(self):
        return self.random.randrange(6) + 1


class ClassLevelDice:
    """Has no random source of its own; it uses the class attribute."""

    random = Random(2)


def test_protocol():
    """random.Random and FakeRandom are both random sources."""
    assert isinstance(Random(), RandomSource)
    assert isinstance(FakeRandom([]), RandomSource)
    assert not isinstance(object(), RandomSource)


def test_fake_random():
    """FakeRandom replays its values and then raises."""
    fake = FakeRandom([0.0, 0.1, 0.5, 0.99])
    assert fake.remaining == 4
    assert fake.random() == 0.0
    assert fake.random() == 0.1
    assert fake.remaining == 2
    assert repr(fake) == "FakeRandom(remaining=2)"
    assert fake.random() == 0.5
    assert fake.random() == 0.99

    with pytest.raises(FakeRandomExhaustedError, match="out of fake random numbers"):
        fake.random()
    with pytest.raises(RuntimeError):
        fake.randrange(3)


def test_fake_randrange():
    """The bounded integer form returns floor(value * n)."""
    fake = FakeRandom([0.0, 0.1, 0.5, 0.99])
    assert [fake.randrange(11) for _ in range(4)] == [0, 1, 5, 10]

    with pytest.raises(FakeRandomExhaustedError):
        fake.randrange(11)

    with pytest.raises(ValueError):
        FakeRandom([0.5]).randrange(0)


def test_fake_random_for():
    """A fake can be installed on an instance and undone."""
    dice = Dice()
    original = dice.random

    fake = fake_random_for(dice, 0.0, 0.5, 0.99)
    assert dice.random is fake
    assert [dice.roll() for _ in range(3)] == [1, 4, 6]
    with pytest.raises(FakeRandomExhaustedError):
        dice.roll()

    undo_fake_random(dice)
    assert dice.random is original
    assert 1 <= dice.roll() <= 6

    # undoing without a fake does nothing
    undo_fake_random(dice)
    assert dice.random is original


def test_fake_twice():
    """Faking twice replaces the first fake but keeps the original source."""
    dice = Dice()
    original = dice.random

    fake_random_for(dice, 0.0)
    fake_random_for(dice, 0.99)
    assert dice.roll() == 6

    undo_fake_random(dice)
    assert dice.random is original


def test_fake_class_attribute():
    """Undoing a fake on an object without its own source removes the override."""
    dice = ClassLevelDice()
    fake_random_for(dice, 0.25)
    assert dice.random.random() == 0.25
    assert ClassLevelDice.random is not dice.random

    undo_fake_random(dice)
    assert "random" not in vars(dice)
    assert dice.random is ClassLevelDice.random


def test_fake_other_attribute():
    """The attribute holding the random source can be named."""

    class Thing:
        def __init__(self):
            self.rng = Random(3)

    thing = Thing()
    original = thing.rng
    with fake_random(thing, 0.75, attribute="rng") as fake:
        assert thing.rng is fake
        assert thing.rng.random() == 0.75
    assert thing.rng is original


def test_fake_random_context_manager_restores_on_error():
    """The context manager undoes the fake even if the block raises."""
    dice = Dice()
    original = dice.random
    with pytest.raises(FakeRandomExhaustedError), fake_random(dice):
        dice.roll()
    assert dice.random is original


def test_fake_random_with_simulation():
    """Faked values drive a simulation deterministically."""
    c = ConsumerSim(3)

    # before faking
    c.run()
    assert len(c.consumed) == 3

    fake_random_for(c, 0.125, 0.25, 0.5)
    c.reset().run()
    assert c.consumed == [0.125, 0.375, 0.875]

    # now have run out of fakes
    with pytest.raises(FakeRandomExhaustedError):
        c.reset().run()

    # see what happens if we fake twice
    fake_random_for(c, 0.5, 0.25, 0.125)
    c.reset().run()
    assert c.consumed == [0.5, 0.75, 0.875]

    with pytest.raises(FakeRandomExhaustedError):
        c.reset().run()

    # can undo and get original behavior back
    undo_fake_random(c)
    c.reset().run()
    assert len(c.consumed) == 3
