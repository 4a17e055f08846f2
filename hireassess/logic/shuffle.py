"""Seeded, reproducible shuffling.

Assessment generation and test fixtures need "random" orderings that are a
pure function of their inputs, so this module never touches `random` or any
other entropy source.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")

_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280


def lcg_fractions(seed: int) -> Iterator[float]:
    """Yield pseudo-random fractions in [0, 1) from a linear congruential generator."""
    state = int(seed)
    while True:
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        yield state / _LCG_MODULUS


def seeded_shuffle(items: Sequence[T], seed: int) -> List[T]:
    """Return a Fisher-Yates permutation of `items` driven by `seed`.

    Walks from the last index down to 1, swapping each slot with the slot at
    `floor(fraction * (i + 1))`. The input is never mutated.
    """
    shuffled = list(items)
    fractions = lcg_fractions(seed)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(next(fractions) * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


__all__ = ["lcg_fractions", "seeded_shuffle"]
