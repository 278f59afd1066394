"""Win and auto-complete predicates."""
from __future__ import annotations

from klondike.cards import RANKS
from klondike.state import GameState


def check_win_condition(state: GameState) -> bool:
    return all(len(pile) == len(RANKS) for _, pile in state.foundations.piles())


def can_auto_complete(state: GameState) -> bool:
    """Return ``True`` once stock and waste are empty and no tableau card is hidden."""

    if state.stock_and_waste.stock or state.stock_and_waste.waste:
        return False
    return all(card.face_up for column in state.tableau.columns for card in column)


__all__ = ["check_win_condition", "can_auto_complete"]
