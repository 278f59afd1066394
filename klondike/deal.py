"""Deal a new game of Klondike."""
from __future__ import annotations

import time
from typing import Callable

from klondike.cards import flip_up
from klondike.deck import create_deck, shuffle_deck
from klondike.state import (
    TABLEAU_COLUMNS,
    Foundations,
    GameState,
    GameStats,
    StockAndWaste,
    Tableau,
)


def deal_game(seed: int | None = None, *, clock: Callable[[], float] = time.time) -> GameState:
    """Shuffle a fresh deck and lay out the opening position.

    Column ``i`` receives ``i + 1`` consecutive cards from the shuffled deck,
    only the last of which is turned face up.  The 24 leftover cards become
    the stock in shuffled order.  *clock* supplies ``stats.start_time``.
    """

    shuffled = shuffle_deck(create_deck(), seed)

    columns = []
    position = 0
    for column_index in range(TABLEAU_COLUMNS):
        size = column_index + 1
        dealt = shuffled[position:position + size]
        columns.append(dealt[:-1] + (flip_up(dealt[-1]),))
        position += size

    return GameState(
        tableau=Tableau(tuple(columns)),
        foundations=Foundations(),
        stock_and_waste=StockAndWaste(stock=shuffled[position:], waste=()),
        stats=GameStats(moves=0, score=0, start_time=clock(), elapsed_seconds=0),
        is_won=False,
    )


__all__ = ["deal_game"]
