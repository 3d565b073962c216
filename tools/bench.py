#!/usr/bin/env python3
"""
Benchmark: nodes searched and time per move, with and without pruning.

Runs the bot on a fixed set of positions at one depth twice: once as plain
minimax and once with alpha-beta cutoffs. The two runs must agree on the
score (pruning only saves work). A lower node count for the pruned run shows
how much work the cutoffs save.

Usage: python3 tools/bench.py [depth]
"""
import os
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from engine.constants import DEFAULT_DEPTH
from engine.rules import RulesEngine
from engine.search import SearchStats, find_best_move

# Fixed positions spanning opening, middlegame, and endgame.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Mate in 1",    "6k1/5ppp/8/8/8/8/5PPP/3R2K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int, prune: bool) -> dict:
    """Search one position and return metrics."""
    rules = RulesEngine(fen)
    stats = SearchStats()
    start = time.monotonic()
    move = find_best_move(rules, depth, stats=stats, prune=prune)
    elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
    return {
        "label": label,
        "move": move.uci() if move is not None else "(none)",
        "score": stats.best_score,
        "nodes": stats.node_count,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DEPTH
    print(f"Chess bot benchmark — depth {depth}")
    print()
    print(
        f"{'Position':<12} {'Move':<7} {'Score':>7} "
        f"{'Nodes(full)':>12} {'Nodes(ab)':>10} {'ms(full)':>9} {'ms(ab)':>7}"
    )
    print("-" * 70)

    for label, fen in POSITIONS:
        full = run_position(label, fen, depth, prune=False)
        pruned = run_position(label, fen, depth, prune=True)
        flag = "" if full["score"] == pruned["score"] else "  SCORE MISMATCH"
        print(
            f"{label:<12} {pruned['move']:<7} {pruned['score']:>7} "
            f"{full['nodes']:>12,} {pruned['nodes']:>10,} "
            f"{full['time_ms']:>9,} {pruned['time_ms']:>7,}{flag}"
        )


if __name__ == "__main__":
    main()
