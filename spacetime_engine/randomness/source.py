"""
Random Source — the injectable capability behind every stochastic decision.

Behavioral Contract:
- Any object with random() -> float in [0, 1) and randint(a, b) -> int
  (inclusive) is a RandomSource; random.Random qualifies
- seeded_source() derives a deterministic source from a game state's seed
  and turn, so resolving the same state twice draws the same numbers
- Helpers never keep hidden global state
"""

import random
from typing import List, Protocol, Sequence, Tuple, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Protocol for random number generation — pluggable for tests."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


def seeded_source(seed: int, turn: int) -> random.Random:
    return random.Random(f"spacetime:{seed}:{turn}")


def roll_chance(source: RandomSource, percent: float) -> bool:
    """True with the given probability, expressed as a percentage (0-100)."""
    if percent <= 0:
        return False
    return source.random() * 100 < percent


def weighted_choice(source: RandomSource, options: Sequence[Tuple[T, float]]) -> T:
    """Pick a value by relative weight. Weights need not sum to anything in particular."""
    if not options:
        raise ValueError("weighted_choice: options must not be empty")

    total = sum(weight for _, weight in options)
    threshold = source.random() * total
    for value, weight in options:
        threshold -= weight
        if threshold <= 0:
            return value
    return options[-1][0]


def pick(source: RandomSource, values: List[T]) -> T:
    return values[source.randint(0, len(values) - 1)]
