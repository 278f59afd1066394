"""Playing card value type and the pure helpers built around it."""
from __future__ import annotations

from dataclasses import dataclass


SUITS = ("hearts", "diamonds", "clubs", "spades")
SUIT_COLORS = {
    "hearts": "red",
    "diamonds": "red",
    "clubs": "black",
    "spades": "black",
}
RANKS = tuple(range(1, 14))

ACE = 1
KING = 13

RANK_DISPLAY_NAMES = {
    1: "A",
    11: "J",
    12: "Q",
    13: "K",
}

SUIT_SYMBOLS = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
}


@dataclass(frozen=True)
class Card:
    """A single immutable playing card."""

    suit: str
    rank: int
    face_up: bool = False

    def __post_init__(self) -> None:
        if self.suit not in SUIT_COLORS:
            raise ValueError(f"Unknown suit: {self.suit!r}")
        if isinstance(self.rank, bool) or self.rank not in RANKS:
            raise ValueError(f"Rank must be between 1 and 13, got {self.rank!r}")

    @property
    def color(self) -> str:
        return SUIT_COLORS[self.suit]

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return display_string(self)


def suit_color(suit: str) -> str:
    return SUIT_COLORS[suit]


def card_color(card: Card) -> str:
    return SUIT_COLORS[card.suit]


def has_alternating_colors(first: Card, second: Card) -> bool:
    return card_color(first) != card_color(second)


def flip_up(card: Card) -> Card:
    """Return *card* face up, reusing the same object when it already is."""

    if card.face_up:
        return card
    return Card(card.suit, card.rank, True)


def flip_down(card: Card) -> Card:
    """Return *card* face down, reusing the same object when it already is."""

    if not card.face_up:
        return card
    return Card(card.suit, card.rank, False)


def rank_display_name(rank: int) -> str:
    return RANK_DISPLAY_NAMES.get(rank, str(rank))


def suit_symbol(suit: str) -> str:
    return SUIT_SYMBOLS[suit]


def display_string(card: Card) -> str:
    """Return the short label for *card*, e.g. ``"10♥"``."""

    return f"{rank_display_name(card.rank)}{suit_symbol(card.suit)}"


def is_king(card: Card) -> bool:
    return card.rank == KING


def is_ace(card: Card) -> bool:
    return card.rank == ACE


def can_stack_on_tableau(card: Card, target: Card) -> bool:
    """Return ``True`` when *card* may be placed on the tableau card *target*."""

    return has_alternating_colors(card, target) and card.rank == target.rank - 1


def can_stack_on_foundation(card: Card, top: Card | None, suit: str) -> bool:
    """Return ``True`` when *card* may go onto the *suit* foundation topped by *top*."""

    if card.suit != suit:
        return False
    if top is None:
        return card.rank == ACE
    return card.rank == top.rank + 1


__all__ = [
    "Card",
    "SUITS",
    "RANKS",
    "ACE",
    "KING",
    "suit_color",
    "card_color",
    "has_alternating_colors",
    "flip_up",
    "flip_down",
    "rank_display_name",
    "suit_symbol",
    "display_string",
    "is_king",
    "is_ace",
    "can_stack_on_tableau",
    "can_stack_on_foundation",
]
