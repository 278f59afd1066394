"""Undo/redo history built from immutable game states."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from klondike.deal import deal_game
from klondike.state import GameState

MAX_HISTORY_LENGTH = 100


@dataclass(frozen=True)
class HistoryState:
    """Past states (oldest first), the present state, and redo states (next first)."""

    past: tuple[GameState, ...]
    present: GameState
    future: tuple[GameState, ...] = ()


def push_history(
    history: HistoryState, state: GameState, limit: int = MAX_HISTORY_LENGTH
) -> HistoryState:
    """Commit *state* as the new present, dropping the oldest past entries beyond *limit*."""

    past = history.past + (history.present,)
    if len(past) > limit:
        past = past[len(past) - limit:] if limit > 0 else ()
    return HistoryState(past=past, present=state, future=())


def undo_history(history: HistoryState) -> HistoryState | None:
    if not history.past:
        return None
    return HistoryState(
        past=history.past[:-1],
        present=history.past[-1],
        future=(history.present,) + history.future,
    )


def redo_history(history: HistoryState) -> HistoryState | None:
    if not history.future:
        return None
    return HistoryState(
        past=history.past + (history.present,),
        present=history.future[0],
        future=history.future[1:],
    )


def create_history(
    seed: int | None = None, *, deal: Callable[[int | None], GameState] = deal_game
) -> HistoryState:
    return HistoryState(past=(), present=deal(seed), future=())


def replace_present(history: HistoryState, state: GameState) -> HistoryState:
    """Swap the present state without recording an undo step."""

    return replace(history, present=state)


def can_undo(history: HistoryState) -> bool:
    return bool(history.past)


def can_redo(history: HistoryState) -> bool:
    return bool(history.future)


__all__ = [
    "MAX_HISTORY_LENGTH",
    "HistoryState",
    "push_history",
    "undo_history",
    "redo_history",
    "create_history",
    "replace_present",
    "can_undo",
    "can_redo",
]
