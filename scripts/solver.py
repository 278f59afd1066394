#!/usr/bin/env python3
"""Greedy Klondike player used to benchmark seeded deals."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from klondike.accessors import top_card
from klondike.cards import SUITS
from klondike.rules import RuleProfile
from klondike.session import GameSession
from klondike.state import (
    FoundationLocation,
    GameState,
    Move,
    TableauLocation,
    WasteLocation,
)
from klondike.validation import is_valid_move
from klondike.win import can_auto_complete

LOGGER = logging.getLogger("solver")


class KlondikeSolver:
    """Greedy Klondike player with deterministic shuffles."""

    def __init__(
        self,
        *,
        draw_count: int = 3,
        pass_limit: Optional[int] = None,
        shuffle_seed: int = 0,
    ) -> None:
        if draw_count < 1:
            raise ValueError("draw_count must be at least 1")
        if pass_limit is not None and pass_limit < 0:
            raise ValueError("pass_limit must be non-negative")
        self.draw_count = int(draw_count)
        self.pass_limit = pass_limit
        self.shuffle_seed = shuffle_seed & 0xFFFFFFFF
        self.session = GameSession(
            RuleProfile(draw_count=self.draw_count, scoring="none"),
            seed=self.shuffle_seed,
        )
        self.passes_used = 0

    @property
    def state(self) -> GameState:
        return self.session.game_state

    # ------------------------------------------------------------------
    # Greedy strategies
    # ------------------------------------------------------------------
    def _try(self, move: Move) -> bool:
        if not is_valid_move(self.state, move):
            return False
        return self.session.move_card(move).ok

    def try_promote_waste_to_foundation(self) -> bool:
        card = top_card(self.state.stock_and_waste.waste)
        if card is None:
            return False
        return self._try(Move(WasteLocation(), FoundationLocation(card.suit)))

    def try_promote_tableau_to_foundation(self) -> bool:
        for index, column in enumerate(self.state.tableau.columns):
            if not column or not column[-1].face_up:
                continue
            source = TableauLocation(index, len(column) - 1)
            for suit in SUITS:
                if self._try(Move(source, FoundationLocation(suit))):
                    return True
        return False

    def try_move_waste_to_tableau(self) -> bool:
        if not self.state.stock_and_waste.waste:
            return False
        move = self.session.best_move(WasteLocation())
        if move is None or not isinstance(move.target, TableauLocation):
            return False
        return self._try(move)

    def try_move_tableau_to_tableau(self) -> bool:
        columns = self.state.tableau.columns
        for src_index, column in enumerate(columns):
            first_face_up = next((i for i, card in enumerate(column) if card.face_up), None)
            if first_face_up is None:
                continue
            # Only shift runs that uncover something: a hidden card or an empty column.
            if first_face_up == 0:
                continue
            run_length = len(column) - first_face_up
            source = TableauLocation(src_index, first_face_up)
            for dest_index in range(len(columns)):
                if dest_index == src_index:
                    continue
                if self._try(Move(source, TableauLocation(dest_index, 0), run_length)):
                    return True
        return False

    def resolve_forced_moves(self) -> bool:
        moved = False
        while True:
            if self.try_promote_waste_to_foundation():
                moved = True
                continue
            if self.try_promote_tableau_to_foundation():
                moved = True
                continue
            if self.try_move_waste_to_tableau():
                moved = True
                continue
            if self.try_move_tableau_to_tableau():
                moved = True
                continue
            break
        return moved

    def draw_or_recycle(self) -> bool:
        stock_and_waste = self.state.stock_and_waste
        if not stock_and_waste.stock:
            if not stock_and_waste.waste:
                return False
            if self.pass_limit is not None and self.passes_used >= self.pass_limit:
                return False
            self.passes_used += 1
        return self.session.draw_card()

    # ------------------------------------------------------------------
    # Game loop
    # ------------------------------------------------------------------
    def foundation_count(self) -> int:
        return self.state.foundations.total()

    def is_won(self) -> bool:
        return self.state.is_won

    def play(self, *, max_steps: int = 5000) -> dict:
        steps = 0
        idle_draws = 0
        while steps < max_steps and not self.is_won():
            steps += 1
            if can_auto_complete(self.state) and self.session.auto_complete():
                continue
            if self.resolve_forced_moves():
                idle_draws = 0
                continue
            stock_and_waste = self.state.stock_and_waste
            # A full cycle through stock and waste without progress means a dead end.
            if idle_draws > len(stock_and_waste.stock) + len(stock_and_waste.waste):
                break
            if not self.draw_or_recycle():
                break
            idle_draws += 1
        LOGGER.debug("Seed %s finished after %s steps", self.shuffle_seed, steps)
        return {
            "won": self.is_won(),
            "moves": self.state.stats.moves,
            "passes_used": self.passes_used,
            "seed": self.shuffle_seed,
            "draw_count": self.draw_count,
            "foundations": self.foundation_count(),
            "stock_remaining": len(self.state.stock_and_waste.stock),
            "waste": len(self.state.stock_and_waste.waste),
            "steps": steps,
        }


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the first deal. Subsequent games advance the RNG deterministically.",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to simulate (default: 1).",
    )
    parser.add_argument(
        "--draw-count",
        type=int,
        default=3,
        help="Number of cards drawn from the stock at a time (default: 3).",
    )
    parser.add_argument(
        "--pass-limit",
        type=int,
        default=-1,
        help="Maximum number of stock recycles. Use -1 for unlimited (default).",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=5000,
        help="Fail-safe iteration cap to avoid infinite loops (default: 5000).",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress per-game output and only print the summary line.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def run_cli(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    master_seed = args.seed if args.seed is not None else random.randrange(0, 2**32)
    master_rng = random.Random(master_seed)
    pass_limit: Optional[int]
    pass_limit = None if args.pass_limit < 0 else args.pass_limit

    wins = 0
    total_moves = 0
    total_foundations = 0

    for game_index in range(args.games):
        if game_index == 0 and args.seed is not None:
            seed = args.seed & 0xFFFFFFFF
        else:
            seed = master_rng.randrange(0, 2**32)

        try:
            solver = KlondikeSolver(
                draw_count=args.draw_count,
                pass_limit=pass_limit,
                shuffle_seed=seed,
            )
        except ValueError as exc:
            LOGGER.error("%s", exc)
            return 1
        result = solver.play(max_steps=args.max_steps)
        total_moves += result["moves"]
        total_foundations += result["foundations"]
        if result["won"]:
            wins += 1

        if not args.quiet:
            status = "win" if result["won"] else "loss"
            print(
                f"Game {game_index + 1}: seed={seed} moves={result['moves']} "
                f"passes={result['passes_used']} foundations={result['foundations']} status={status}"
            )

    win_rate = (wins / args.games) * 100 if args.games else 0.0
    average_moves = total_moves / args.games if args.games else 0.0
    average_foundations = total_foundations / args.games if args.games else 0.0

    print(
        "Summary: "
        f"games={args.games} wins={wins} ({win_rate:.1f}%) "
        f"avg_moves={average_moves:.1f} avg_foundations={average_foundations:.1f}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(run_cli())
