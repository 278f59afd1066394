"""Apply validated moves to a game state."""
from __future__ import annotations

from dataclasses import replace

from klondike.accessors import cards_for_move, tableau_column
from klondike.cards import flip_up
from klondike.state import (
    CardLocation,
    FoundationLocation,
    GameState,
    Move,
    Pile,
    Result,
    TableauLocation,
    WasteLocation,
    failure,
    success,
)
from klondike.validation import validate_move
from klondike.win import check_win_condition


def _remove_from_source(state: GameState, source: CardLocation) -> GameState:
    if isinstance(source, TableauLocation):
        column = state.tableau.columns[source.column_index][: source.card_index]
        if column and not column[-1].face_up:
            column = column[:-1] + (flip_up(column[-1]),)
        return replace(state, tableau=state.tableau.with_column(source.column_index, column))
    if isinstance(source, WasteLocation):
        stock_and_waste = replace(
            state.stock_and_waste, waste=state.stock_and_waste.waste[:-1]
        )
        return replace(state, stock_and_waste=stock_and_waste)
    if isinstance(source, FoundationLocation):
        pile = state.foundations.pile(source.suit)[:-1]
        return replace(state, foundations=state.foundations.with_pile(source.suit, pile))
    return state


def _add_to_destination(state: GameState, target: CardLocation, cards: Pile) -> GameState:
    if isinstance(target, TableauLocation):
        column = state.tableau.columns[target.column_index] + cards
        return replace(state, tableau=state.tableau.with_column(target.column_index, column))
    if isinstance(target, FoundationLocation):
        pile = state.foundations.pile(target.suit) + cards
        return replace(state, foundations=state.foundations.with_pile(target.suit, pile))
    return state


def apply_move(state: GameState, move: Move) -> Result[GameState]:
    """Return a new state with *move* applied, or the validation failure.

    The input state is never modified; columns and piles the move does not
    touch are shared with the result.
    """

    validation = validate_move(state, move)
    if not validation.ok:
        return failure(validation.error)

    cards = cards_for_move(state, move.source)
    if not cards:
        return failure("No cards to move")

    moved = _add_to_destination(_remove_from_source(state, move.source), move.target, cards)
    stats = replace(moved.stats, moves=moved.stats.moves + 1)
    return success(replace(moved, stats=stats, is_won=check_win_condition(moved)))


def move_reveals_card(state: GameState, move: Move) -> bool:
    """Return ``True`` when applying *move* would turn up a hidden tableau card."""

    source = move.source
    if not isinstance(source, TableauLocation) or source.card_index < 1:
        return False
    column = tableau_column(state, source.column_index)
    if column is None or source.card_index >= len(column):
        return False
    return not column[source.card_index - 1].face_up


__all__ = ["apply_move", "move_reveals_card"]
