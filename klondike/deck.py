"""Deck construction and the deterministic shuffle."""
from __future__ import annotations

import math
import random
from typing import Callable, Sequence

from klondike.cards import RANKS, SUITS, Card

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS = 2**31


def create_deck() -> tuple[Card, ...]:
    """Return the 52 cards face down in canonical suit-major order."""

    return tuple(Card(suit, rank) for suit in SUITS for rank in RANKS)


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a linear congruential generator yielding floats in ``[0, 1)``.

    The sequence depends only on *seed*, so identical seeds always reproduce
    identical shuffles regardless of platform.
    """

    state = int(seed)

    def _next() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return _next


def shuffle_deck(deck: Sequence[Card], seed: int | None = None) -> tuple[Card, ...]:
    """Return a Fisher-Yates shuffled copy of *deck*.

    A seed selects the deterministic generator; without one the module level
    :func:`random.random` source is used.  *deck* itself is left untouched.
    """

    cards = list(deck)
    rng = seeded_random(seed) if seed is not None else random.random
    for index in range(len(cards) - 1, 0, -1):
        swap = math.floor(rng() * (index + 1))
        cards[index], cards[swap] = cards[swap], cards[index]
    return tuple(cards)


__all__ = ["create_deck", "seeded_random", "shuffle_deck"]
