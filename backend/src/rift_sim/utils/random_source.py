"""Injectable randomness for every stochastic decision in the simulator."""

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the simulator relies on."""

    def random(self) -> float: ...

    def randrange(self, start: int, stop: int = ..., step: int = ...) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def shuffle(self, x: list) -> None: ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build a fresh random source; a fixed seed gives reproducible runs."""
    return random.Random(seed)


def weighted_choice(rng: RandomSource, items: Sequence[T], weights: Sequence[float]) -> T:
    """Roulette-wheel draw over ``items``.

    Always returns an item: non-positive totals fall back to the first entry,
    as do floating point leftovers at the end of the wheel.
    """
    if not items:
        raise ValueError("weighted_choice needs at least one item")

    total = sum(weights)
    if total <= 0:
        return items[0]

    r = rng.random() * total
    for item, weight in zip(items, weights):
        if r < weight:
            return item
        r -= weight
    return items[0]
