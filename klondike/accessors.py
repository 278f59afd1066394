"""Read-only lookups over a :class:`~klondike.state.GameState`."""
from __future__ import annotations

from klondike.cards import Card
from klondike.state import (
    CardLocation,
    FoundationLocation,
    Foundations,
    GameState,
    Pile,
    StockLocation,
    TableauLocation,
    WasteLocation,
)


def top_card(pile: Pile) -> Card | None:
    return pile[-1] if pile else None


def foundation_pile(foundations: Foundations, suit: str) -> Pile:
    return foundations.pile(suit)


def tableau_column(state: GameState, column_index: int) -> Pile | None:
    """Return the column at *column_index*, or ``None`` when out of range."""

    if not 0 <= column_index < len(state.tableau.columns):
        return None
    return state.tableau.columns[column_index]


def card_at(state: GameState, location: CardLocation) -> Card | None:
    """Resolve *location* to the single card shown there.

    Tableau locations address an exact index; every other pile reports its
    top card.  Missing cards resolve to ``None``.
    """

    if isinstance(location, TableauLocation):
        column = tableau_column(state, location.column_index)
        if column is None or not 0 <= location.card_index < len(column):
            return None
        return column[location.card_index]
    if isinstance(location, FoundationLocation):
        return top_card(state.foundations.pile(location.suit))
    if isinstance(location, WasteLocation):
        return top_card(state.stock_and_waste.waste)
    if isinstance(location, StockLocation):
        return top_card(state.stock_and_waste.stock)
    raise TypeError(f"Unsupported location: {location!r}")


def cards_for_move(state: GameState, source: CardLocation) -> Pile:
    """Return the run of cards that taking *source* as a move origin would carry."""

    if isinstance(source, TableauLocation):
        column = tableau_column(state, source.column_index)
        if column is None or not 0 <= source.card_index < len(column):
            return ()
        return column[source.card_index:]
    if isinstance(source, WasteLocation):
        card = top_card(state.stock_and_waste.waste)
        return (card,) if card is not None else ()
    if isinstance(source, FoundationLocation):
        card = top_card(state.foundations.pile(source.suit))
        return (card,) if card is not None else ()
    if isinstance(source, StockLocation):
        # The stock is only ever drawn from.
        return ()
    raise TypeError(f"Unsupported location: {source!r}")


__all__ = ["top_card", "foundation_pile", "tableau_column", "card_at", "cards_for_move"]
