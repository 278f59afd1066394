"""Game session: the one mutable holder of a :class:`HistoryState`.

Every action runs a pure engine transition against the present state and
commits the outcome to history only when it produced a different object, so
rejected moves and no-op draws never create undo steps.
"""
from __future__ import annotations

import logging
import time
from functools import partial
from typing import Any, Callable, Mapping

from klondike.deal import deal_game
from klondike.history import (
    HistoryState,
    create_history,
    push_history,
    redo_history,
    replace_present,
    undo_history,
)
from klondike.moves import apply_move, move_reveals_card
from klondike.rules import STANDARD, RuleProfile
from klondike.scoring import calculate_auto_complete_score, calculate_move_score, initial_score
from klondike.smart_moves import auto_complete, find_best_move
from klondike.state import (
    CardLocation,
    GameState,
    Move,
    Result,
    coerce_int,
    get_value,
    location_from_dict,
    move_from_dict,
    success,
    with_stats,
)
from klondike.stock import draw_from_stock
from klondike.win import can_auto_complete

LOGGER = logging.getLogger("klondike.session")

ACTION_TYPES = (
    "NEW_GAME",
    "MOVE_CARD",
    "DRAW_CARD",
    "UNDO",
    "REDO",
    "AUTO_COMPLETE",
    "BEST_MOVE",
)


class ActionError(ValueError):
    """Raised when a dispatched action is malformed or unknown."""


class GameSession:
    """Owns the history of a single game and applies user actions to it."""

    def __init__(
        self,
        profile: RuleProfile = STANDARD,
        seed: int | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.profile = profile
        self._clock = clock
        self.seed = seed
        self.history: HistoryState = self._fresh_history(seed)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def game_state(self) -> GameState:
        return self.history.present

    def can_undo(self) -> bool:
        return self.profile.is_action_legal(self.history, {"type": "UNDO"})

    def can_redo(self) -> bool:
        return self.profile.is_action_legal(self.history, {"type": "REDO"})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _fresh_history(self, seed: int | None) -> HistoryState:
        history = create_history(seed, deal=partial(deal_game, clock=self._clock))
        opening = initial_score(self.profile.scoring_mode)
        if opening:
            history = replace_present(history, with_stats(history.present, score=opening))
        return history

    def _commit(self, state: GameState) -> None:
        self.history = push_history(self.history, state, self.profile.max_history)

    def _score(self, state: GameState, points: int) -> GameState:
        if not points:
            return state
        return with_stats(state, score=state.stats.score + points)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def new_game(self, seed: int | None = None) -> GameState:
        self.seed = seed
        self.history = self._fresh_history(seed)
        LOGGER.debug("Dealt new game (seed=%s)", seed)
        return self.history.present

    def move_card(self, move: Move) -> Result[GameState]:
        """Apply *move*; a failed result leaves the history untouched."""

        present = self.history.present
        result = apply_move(present, move)
        if not result.ok:
            LOGGER.debug("Rejected move %s: %s", move, result.error)
            return result

        change = calculate_move_score(
            move, move_reveals_card(present, move), self.profile.scoring_mode
        )
        state = self._score(result.value, change.points)
        self._commit(state)
        if state.is_won:
            LOGGER.info("Game won in %s moves", state.stats.moves)
        return success(state)

    def draw_card(self, count: int | None = None) -> bool:
        """Turn cards from the stock, or recycle the waste when the stock is empty.

        *count* defaults to the profile's draw size; any other size is refused.
        Non-integral counts raise ``ValueError``.
        """

        draw = self.profile.draw if count is None else coerce_int(count, "count")
        if not self.profile.is_action_legal(self.history, {"type": "DRAW_CARD", "count": draw}):
            LOGGER.debug("Draw of %s cards not allowed by profile", draw)
            return False

        state = draw_from_stock(self.history.present, draw)
        if state is self.history.present:
            return False
        self._commit(state)
        return True

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        history = undo_history(self.history)
        if history is None:
            return False
        self.history = history
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        history = redo_history(self.history)
        if history is None:
            return False
        self.history = history
        return True

    def auto_complete(self) -> bool:
        present = self.history.present
        if not can_auto_complete(present):
            return False

        state = auto_complete(present)
        if state is present:
            return False

        moved = state.foundations.total() - present.foundations.total()
        change = calculate_auto_complete_score(moved, self.profile.scoring_mode)
        state = self._score(state, change.points)
        self._commit(state)
        LOGGER.debug("Auto-completed %s cards (won=%s)", moved, state.is_won)
        return True

    def best_move(self, location: CardLocation) -> Move | None:
        return find_best_move(self.history.present, location)

    def tick(self, elapsed_seconds: int) -> GameState:
        """Record elapsed play time on the present state without an undo step."""

        state = with_stats(self.history.present, elapsed_seconds=max(int(elapsed_seconds), 0))
        self.history = replace_present(self.history, state)
        return state

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, action: Any) -> Any:
        """Route a ``{"type": ...}`` action mapping (or object) to its handler."""

        kind = get_value(action, "type")
        if not kind:
            raise ActionError("Action must define a 'type'")
        kind = str(kind).upper()
        if kind not in ACTION_TYPES:
            raise ActionError(f"Unknown action type: {kind!r}")

        if kind == "NEW_GAME":
            return self.new_game(get_value(action, "seed"))
        if kind == "MOVE_CARD":
            move = get_value(action, "move")
            if move is None:
                raise ActionError("MOVE_CARD requires a 'move'")
            if not isinstance(move, Move):
                try:
                    move = move_from_dict(move)
                except (TypeError, ValueError) as exc:
                    raise ActionError(f"Invalid move: {exc}") from exc
            return self.move_card(move)
        if kind == "DRAW_CARD":
            try:
                return self.draw_card(get_value(action, "count"))
            except ValueError as exc:
                raise ActionError(f"Invalid draw: {exc}") from exc
        if kind == "UNDO":
            return self.undo()
        if kind == "REDO":
            return self.redo()
        if kind == "AUTO_COMPLETE":
            return self.auto_complete()

        # BEST_MOVE
        location = get_value(action, "location")
        if location is None:
            raise ActionError("BEST_MOVE requires a 'location'")
        if isinstance(location, Mapping):
            try:
                location = location_from_dict(location)
            except ValueError as exc:
                raise ActionError(f"Invalid location: {exc}") from exc
        return self.best_move(location)


__all__ = ["GameSession", "ActionError", "ACTION_TYPES", "LOGGER"]
