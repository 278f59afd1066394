"""Point values for moves and finished games.

These are lookups consumed by the session layer; the engine transitions
never touch ``stats.score`` themselves.
"""
from __future__ import annotations

from dataclasses import dataclass

from klondike.state import (
    DECK_SIZE,
    FoundationLocation,
    GameState,
    Move,
    TableauLocation,
    WasteLocation,
)

TIME_BONUS_NUMERATOR = 700000
FAST_WIN_SECONDS = 30
SLOW_WIN_SECONDS = 600
VEGAS_BUY_IN = -52


@dataclass(frozen=True)
class ScoreChange:
    points: int
    reason: str


def _standard_base_score(move: Move) -> ScoreChange:
    source, target = move.source, move.target
    if isinstance(source, WasteLocation) and isinstance(target, TableauLocation):
        return ScoreChange(5, "Waste to Tableau")
    if isinstance(source, WasteLocation) and isinstance(target, FoundationLocation):
        return ScoreChange(10, "Waste to Foundation")
    if isinstance(source, TableauLocation) and isinstance(target, FoundationLocation):
        return ScoreChange(10, "Tableau to Foundation")
    if isinstance(source, FoundationLocation) and isinstance(target, TableauLocation):
        return ScoreChange(-15, "Foundation to Tableau (penalty)")
    return ScoreChange(0, "")


def calculate_move_score(
    move: Move, was_card_flipped: bool, mode: str = "standard"
) -> ScoreChange:
    """Return the points earned by *move*.

    Standard scoring adds 5 points when the move turned up a hidden tableau
    card.  Vegas scoring only counts cards entering or leaving a foundation.
    """

    if mode == "none":
        return ScoreChange(0, "")

    if mode == "vegas":
        if isinstance(move.target, FoundationLocation):
            return ScoreChange(5, "Card to foundation")
        if isinstance(move.source, FoundationLocation) and isinstance(move.target, TableauLocation):
            return ScoreChange(-5, "Card from foundation")
        return ScoreChange(0, "")

    base = _standard_base_score(move)
    if not (was_card_flipped and isinstance(move.source, TableauLocation)):
        return base
    reason = f"{base.reason} + Card flip" if base.reason else "Card flip"
    return ScoreChange(base.points + 5, reason)


def calculate_auto_complete_score(cards_moved: int, mode: str = "standard") -> ScoreChange:
    """Return the points for *cards_moved* tableau cards swept onto the foundations."""

    per_card = calculate_move_score(
        Move(TableauLocation(0, 0), FoundationLocation("hearts")), False, mode
    )
    if not cards_moved or not per_card.points:
        return ScoreChange(0, "")
    return ScoreChange(per_card.points * cards_moved, "Auto-complete")


def calculate_time_bonus(elapsed_seconds: int, mode: str = "standard") -> int:
    if mode != "standard":
        return 0
    if elapsed_seconds <= FAST_WIN_SECONDS:
        return TIME_BONUS_NUMERATOR // FAST_WIN_SECONDS
    if elapsed_seconds >= SLOW_WIN_SECONDS:
        return 0
    return TIME_BONUS_NUMERATOR // elapsed_seconds


def calculate_final_score(current_score: int, elapsed_seconds: int, mode: str = "standard") -> int:
    return current_score + calculate_time_bonus(elapsed_seconds, mode)


def initial_score(mode: str = "standard") -> int:
    return VEGAS_BUY_IN if mode == "vegas" else 0


def is_undo_allowed(mode: str = "standard") -> bool:
    return mode != "vegas"


def format_score(score: int, mode: str = "standard") -> str:
    if mode == "vegas":
        return f"${score}" if score >= 0 else f"-${abs(score)}"
    return str(score)


def calculate_progress(state: GameState) -> int:
    """Return the percentage of the deck already on the foundations."""

    return round(state.foundations.total() / DECK_SIZE * 100)


def format_elapsed_time(seconds: int) -> str:
    minutes, remainder = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{remainder:02d}"


__all__ = [
    "ScoreChange",
    "calculate_move_score",
    "calculate_auto_complete_score",
    "calculate_time_bonus",
    "calculate_final_score",
    "initial_score",
    "is_undo_allowed",
    "format_score",
    "calculate_progress",
    "format_elapsed_time",
]
