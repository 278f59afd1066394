"""Klondike solitaire rules engine."""
from __future__ import annotations

from klondike.accessors import card_at, cards_for_move, foundation_pile, top_card
from klondike.cards import RANKS, SUITS, Card, display_string, flip_down, flip_up
from klondike.deal import deal_game
from klondike.deck import create_deck, seeded_random, shuffle_deck
from klondike.history import (
    MAX_HISTORY_LENGTH,
    HistoryState,
    create_history,
    push_history,
    redo_history,
    undo_history,
)
from klondike.moves import apply_move, move_reveals_card
from klondike.rules import DRAW_THREE, STANDARD, VEGAS, RuleProfile
from klondike.session import ActionError, GameSession
from klondike.smart_moves import auto_complete, find_best_move
from klondike.state import (
    FoundationLocation,
    GameState,
    GameStats,
    Move,
    Result,
    StockLocation,
    TableauLocation,
    WasteLocation,
)
from klondike.stock import draw_from_stock
from klondike.validation import validate_move
from klondike.win import can_auto_complete, check_win_condition

__version__ = "0.1.0"

__all__ = [
    "Card",
    "SUITS",
    "RANKS",
    "flip_up",
    "flip_down",
    "display_string",
    "create_deck",
    "seeded_random",
    "shuffle_deck",
    "deal_game",
    "top_card",
    "card_at",
    "cards_for_move",
    "foundation_pile",
    "GameState",
    "GameStats",
    "Move",
    "Result",
    "TableauLocation",
    "FoundationLocation",
    "StockLocation",
    "WasteLocation",
    "validate_move",
    "apply_move",
    "move_reveals_card",
    "draw_from_stock",
    "check_win_condition",
    "can_auto_complete",
    "auto_complete",
    "find_best_move",
    "MAX_HISTORY_LENGTH",
    "HistoryState",
    "create_history",
    "push_history",
    "undo_history",
    "redo_history",
    "RuleProfile",
    "STANDARD",
    "DRAW_THREE",
    "VEGAS",
    "GameSession",
    "ActionError",
]
