#!/usr/bin/env python3
"""Seed benchmark for the greedy Klondike player.

Plays a contiguous range of seeds for each requested draw mode, then scores
every won deal with a ``difficulty_score`` and a categorical
``difficulty_level`` bucket so interesting seeds can be picked out.
"""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from scripts.solver import KlondikeSolver

LOGGER = logging.getLogger("benchmark")

RESULT_COLUMNS = [
    "seed",
    "draw_count",
    "won",
    "moves",
    "foundations",
    "passes_used",
    "steps",
]


class BenchmarkError(RuntimeError):
    """Raised when the benchmark cannot be run with the given options."""


@dataclass(frozen=True)
class DrawModeSummary:
    """Aggregate statistics for one draw mode."""

    draw_count: int
    games: int
    wins: int
    win_rate: float
    median_moves: float | None
    average_foundations: float
    difficulty_counts: dict[str, int]


def play_seeds(
    seeds: Iterable[int],
    draw_counts: Sequence[int],
    *,
    pass_limit: int | None = None,
    max_steps: int = 5000,
) -> pd.DataFrame:
    rows = []
    for draw_count in draw_counts:
        for seed in seeds:
            solver = KlondikeSolver(
                draw_count=draw_count, pass_limit=pass_limit, shuffle_seed=seed
            )
            result = solver.play(max_steps=max_steps)
            LOGGER.debug("seed=%s draw=%s won=%s", seed, draw_count, result["won"])
            rows.append({column: result[column] for column in RESULT_COLUMNS})
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def _compute_score(subset: pd.DataFrame) -> pd.Series:
    move_term = np.log10(subset["moves"].astype(float) + 1.0)
    step_term = np.log10(subset["steps"].astype(float) + 1.0)
    return move_term + step_term


def _assign_levels(group: pd.DataFrame) -> pd.Series:
    if group.empty:
        return pd.Series(dtype="object")

    scores = group["difficulty_score"]
    p30 = np.percentile(scores, 30)
    p70 = np.percentile(scores, 70)

    buckets = np.full(len(group), "medium", dtype=object)
    buckets[(scores < p30).to_numpy()] = "easy"
    buckets[(scores > p70).to_numpy()] = "hard"
    return pd.Series(buckets, index=group.index)


def score_difficulty(frame: pd.DataFrame) -> pd.DataFrame:
    """Return *frame* with difficulty columns filled in for won deals."""

    scored = frame.copy()
    scored["difficulty_score"] = np.nan
    scored["difficulty_level"] = None
    if scored.empty:
        return scored

    won = scored[scored["won"].astype(bool)]
    if won.empty:
        LOGGER.info("No won deals to score")
        return scored

    working = won.copy()
    working["difficulty_score"] = _compute_score(working)
    levels = [
        _assign_levels(group)
        for _, group in working.groupby("draw_count", sort=False)
    ]
    working["difficulty_level"] = pd.concat(levels)

    scored.loc[working.index, "difficulty_score"] = working["difficulty_score"]
    scored.loc[working.index, "difficulty_level"] = working["difficulty_level"]
    return scored


def summarise(frame: pd.DataFrame) -> list[DrawModeSummary]:
    summaries = []
    for draw_count, group in frame.groupby("draw_count", sort=True):
        wins = int(group["won"].astype(bool).sum())
        won_moves = group.loc[group["won"].astype(bool), "moves"]
        levels = group["difficulty_level"].dropna()
        summaries.append(
            DrawModeSummary(
                draw_count=int(draw_count),
                games=int(len(group)),
                wins=wins,
                win_rate=wins / len(group) if len(group) else 0.0,
                median_moves=float(won_moves.median()) if not won_moves.empty else None,
                average_foundations=float(group["foundations"].mean()),
                difficulty_counts={
                    str(label): int(count)
                    for label, count in levels.value_counts().sort_index().items()
                },
            )
        )
    return summaries


def format_summary(summary: DrawModeSummary) -> str:
    lines = [f"draw {summary.draw_count}: {summary.games} games"]
    lines.append(f"  wins={summary.wins} ({summary.win_rate * 100:.1f}%)")
    if summary.median_moves is not None:
        lines.append(f"  median moves per win: {summary.median_moves:.1f}")
    lines.append(f"  average foundation cards: {summary.average_foundations:.1f}")
    if summary.difficulty_counts:
        ordered = ", ".join(
            f"{label}={count}" for label, count in sorted(summary.difficulty_counts.items())
        )
        lines.append(f"  difficulty: {ordered}")
    return "\n".join(lines)


def run_benchmark(
    *,
    start_seed: int,
    games: int,
    draw_counts: Sequence[int],
    pass_limit: int | None = None,
    max_steps: int = 5000,
) -> tuple[pd.DataFrame, list[DrawModeSummary]]:
    if games < 1:
        raise BenchmarkError("--games must be at least 1")
    if any(count < 1 for count in draw_counts):
        raise BenchmarkError("--draw-count values must be at least 1")

    seeds = range(start_seed, start_seed + games)
    frame = play_seeds(seeds, draw_counts, pass_limit=pass_limit, max_steps=max_steps)
    scored = score_difficulty(frame)
    return scored, summarise(scored)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--start-seed",
        type=int,
        default=0,
        help="First seed of the range to play (default: 0)",
    )
    parser.add_argument(
        "--games",
        metavar="N",
        type=int,
        default=50,
        help="Number of consecutive seeds to play per draw mode (default: 50)",
    )
    parser.add_argument(
        "--draw-count",
        dest="draw_counts",
        type=int,
        action="append",
        default=None,
        help="Draw mode to benchmark. Can be repeated (default: 1 and 3).",
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
        help="Per-game iteration cap (default: 5000)",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Emit the summaries as JSON instead of formatted text.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    draw_counts = args.draw_counts or [1, 3]
    pass_limit = None if args.pass_limit < 0 else args.pass_limit

    try:
        _, summaries = run_benchmark(
            start_seed=args.start_seed,
            games=args.games,
            draw_counts=draw_counts,
            pass_limit=pass_limit,
            max_steps=args.max_steps,
        )
    except BenchmarkError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.as_json:
        print(json.dumps([asdict(summary) for summary in summaries], indent=2))
    else:
        for summary in summaries:
            print(format_summary(summary))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
