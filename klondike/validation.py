"""Move legality checks."""
from __future__ import annotations

from klondike.accessors import cards_for_move, tableau_column, top_card
from klondike.cards import Card, can_stack_on_foundation, can_stack_on_tableau, is_king
from klondike.state import (
    FoundationLocation,
    GameState,
    Move,
    Result,
    StockLocation,
    TableauLocation,
    WasteLocation,
    failure,
    success,
)

NO_CARDS_AT_SOURCE = "No cards at source location"
FACE_DOWN_SOURCE = "Cannot move face-down cards"
KINGS_ONLY_ON_EMPTY = "Only Kings can be placed on empty tableau columns"
TABLEAU_STACKING = "Card must be opposite color and one rank lower"
SINGLE_CARD_TO_FOUNDATION = "Can only move single cards to foundation"
FOUNDATION_STACKING = "Card must be same suit and next rank up"
NOT_ONTO_STOCK = "Cannot move cards to stock"
NOT_ONTO_WASTE = "Cannot move cards directly to waste"
INVALID_COLUMN = "Invalid destination column"


def _validate_tableau_target(state: GameState, target: TableauLocation, card: Card) -> Result[bool]:
    column = tableau_column(state, target.column_index)
    if column is None:
        return failure(INVALID_COLUMN)

    target_card = top_card(column)
    if target_card is None:
        return success(True) if is_king(card) else failure(KINGS_ONLY_ON_EMPTY)
    if can_stack_on_tableau(card, target_card):
        return success(True)
    return failure(TABLEAU_STACKING)


def _validate_foundation_target(
    state: GameState, move: Move, target: FoundationLocation, card: Card
) -> Result[bool]:
    if move.card_count > 1:
        return failure(SINGLE_CARD_TO_FOUNDATION)
    pile = state.foundations.pile(target.suit)
    if can_stack_on_foundation(card, top_card(pile), target.suit):
        return success(True)
    return failure(FOUNDATION_STACKING)


def validate_move(state: GameState, move: Move) -> Result[bool]:
    """Return a successful :class:`Result` when *move* is legal in *state*.

    The lead card must be face up and is the only card of a tableau run
    checked against the destination; the rest of the run is taken as already
    built.
    """

    cards = cards_for_move(state, move.source)
    if not cards:
        return failure(NO_CARDS_AT_SOURCE)

    lead = cards[0]
    if not lead.face_up:
        return failure(FACE_DOWN_SOURCE)

    target = move.target
    if isinstance(target, TableauLocation):
        return _validate_tableau_target(state, target, lead)
    if isinstance(target, FoundationLocation):
        return _validate_foundation_target(state, move, target, lead)
    if isinstance(target, StockLocation):
        return failure(NOT_ONTO_STOCK)
    if isinstance(target, WasteLocation):
        return failure(NOT_ONTO_WASTE)
    return failure(f"Unsupported destination: {target!r}")


def is_valid_move(state: GameState, move: Move) -> bool:
    return validate_move(state, move).ok


__all__ = [
    "validate_move",
    "is_valid_move",
    "NO_CARDS_AT_SOURCE",
    "FACE_DOWN_SOURCE",
    "KINGS_ONLY_ON_EMPTY",
    "TABLEAU_STACKING",
    "SINGLE_CARD_TO_FOUNDATION",
    "FOUNDATION_STACKING",
    "NOT_ONTO_STOCK",
    "NOT_ONTO_WASTE",
    "INVALID_COLUMN",
]
