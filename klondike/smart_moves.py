"""Greedy auto-complete and the double-click move search."""
from __future__ import annotations

from klondike.accessors import card_at
from klondike.cards import SUITS
from klondike.state import (
    DECK_SIZE,
    TABLEAU_COLUMNS,
    CardLocation,
    FoundationLocation,
    GameState,
    Move,
    TableauLocation,
)
from klondike.moves import apply_move
from klondike.validation import is_valid_move
from klondike.win import can_auto_complete, check_win_condition


def _auto_move(state: GameState) -> GameState | None:
    """Apply the first tableau-to-foundation move found, scanning columns left to right."""

    for column_index, column in enumerate(state.tableau.columns):
        if not column:
            continue
        source = TableauLocation(column_index, len(column) - 1)
        for suit in SUITS:
            result = apply_move(state, Move(source, FoundationLocation(suit), 1))
            if result.ok:
                return result.value
    return None


def auto_complete(state: GameState) -> GameState:
    """Push tableau cards onto the foundations until nothing more moves.

    Returns *state* untouched unless :func:`can_auto_complete` holds.  Each
    step removes one tableau card, so the loop runs at most 52 times.
    """

    if not can_auto_complete(state):
        return state

    current = state
    for _ in range(DECK_SIZE):
        if check_win_condition(current):
            break
        next_state = _auto_move(current)
        if next_state is None:
            break
        current = next_state
    return current


def find_best_move(state: GameState, source: CardLocation) -> Move | None:
    """Pick a destination for a double-clicked card.

    Single cards try the foundations first (in suit order), then every other
    tableau column from left to right.
    """

    if card_at(state, source) is None:
        return None

    if isinstance(source, TableauLocation):
        card_count = len(state.tableau.columns[source.column_index]) - source.card_index
    else:
        card_count = 1

    if card_count == 1:
        for suit in SUITS:
            move = Move(source, FoundationLocation(suit), 1)
            if is_valid_move(state, move):
                return move

    for column_index in range(TABLEAU_COLUMNS):
        if isinstance(source, TableauLocation) and source.column_index == column_index:
            continue
        move = Move(source, TableauLocation(column_index, 0), card_count)
        if is_valid_move(state, move):
            return move

    return None


__all__ = ["auto_complete", "find_best_move"]
