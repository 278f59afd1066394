"""Stock and waste pile operations."""
from __future__ import annotations

from dataclasses import replace

from klondike.cards import flip_down, flip_up
from klondike.state import GameState, StockAndWaste


def draw_from_stock(state: GameState, count: int = 1) -> GameState:
    """Turn up to *count* cards from the stock onto the waste.

    With an empty stock the waste is flipped face down and reversed back into
    the stock.  When both piles are empty *state* itself is returned, so
    callers can detect the no-op by identity.
    """

    stock = state.stock_and_waste.stock
    waste = state.stock_and_waste.waste

    if not stock:
        if not waste:
            return state
        recycled = tuple(flip_down(card) for card in reversed(waste))
        return replace(state, stock_and_waste=StockAndWaste(stock=recycled, waste=()))

    draw_count = min(max(int(count), 1), len(stock))
    drawn = tuple(flip_up(card) for card in reversed(stock[-draw_count:]))
    return replace(
        state,
        stock_and_waste=StockAndWaste(stock=stock[:-draw_count], waste=waste + drawn),
    )


__all__ = ["draw_from_stock"]
