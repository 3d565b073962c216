"""
Bot move selection: fixed-depth minimax with alpha-beta pruning.

This module defines the stable entry point the game layer depends on,
find_best_move(). Internals (the minimax recursion, the stats counter) may
evolve; the signature of find_best_move() does not.

Search model:
    The search runs over one shared RulesEngine. Every apply() made while
    exploring the tree is paired with exactly one undo() before the frame
    returns, so the live position is unchanged once find_best_move() is done.
    Nothing else may touch that position while a search is in flight; the
    caller is responsible for that exclusivity.

    Scores are always relative to one explicit perspective color (normally
    the side to move at the root). Nodes where that side is to move are
    maximizing, the others minimizing. There is no time limit and no
    cancellation: depth is the only bound on work.

A second, much simpler bot, random_move(), plays a uniformly random legal
move. It is selected through Bot(strategy="random") and never shares code
paths with the minimax search.
"""

import random
from dataclasses import dataclass
from typing import Optional

import chess

from engine.constants import (
    BOT_STRATEGIES,
    DEFAULT_DEPTH,
    INFINITY,
    MIN_DEPTH,
    MINIMAX,
)
from engine.evaluate import evaluate_position
from engine.rules import RulesEngine


@dataclass
class SearchStats:
    """
    Per-search counters.

    Attributes:
        node_count: Number of minimax frames entered, root children included.
        best_score: Backed-up score of the chosen root move, from the
                    perspective the search was run for.
    """

    node_count: int = 0
    best_score: int = 0


def minimax(
    rules: RulesEngine,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    perspective: str,
    stats: Optional[SearchStats] = None,
    prune: bool = True,
) -> int:
    """
    Minimax score of the current position with alpha-beta pruning.

    Args:
        rules:       Rules engine holding the live position. Modified in
                     place via apply/undo and always restored on return.
        depth:       Remaining plies. At 0 the position is scored statically.
        alpha:       Best score the maximizer can already guarantee.
        beta:        Best score the minimizer can already guarantee.
        maximizing:  True when `perspective` is to move at this node.
        perspective: Color name every score is relative to.
        stats:       Optional counters updated in place.
        prune:       When False, siblings are never cut off (plain minimax).
                     The returned score is identical either way.

    Returns:
        Score in centipawns from `perspective`'s point of view.
    """
    if stats is not None:
        stats.node_count += 1

    if depth == 0 or rules.is_game_over():
        return evaluate_position(rules, perspective)

    moves = rules.legal_moves()
    if not moves:
        # Only reachable with a rules engine that misses a game-over state.
        return evaluate_position(rules, perspective)

    if maximizing:
        best = -INFINITY
        for move in moves:
            rules.apply(move)
            score = minimax(rules, depth - 1, alpha, beta, False, perspective, stats, prune)
            rules.undo()
            best = max(best, score)
            alpha = max(alpha, best)
            if prune and beta <= alpha:
                break
        return best

    best = INFINITY
    for move in moves:
        rules.apply(move)
        score = minimax(rules, depth - 1, alpha, beta, True, perspective, stats, prune)
        rules.undo()
        best = min(best, score)
        beta = min(beta, best)
        if prune and beta <= alpha:
            break
    return best


def find_best_move(
    rules: RulesEngine,
    depth: int = DEFAULT_DEPTH,
    perspective: Optional[str] = None,
    stats: Optional[SearchStats] = None,
    prune: bool = True,
) -> Optional[chess.Move]:
    """
    Return the best move for the side to move, searching `depth` plies.

    Root moves are tried in the rules engine's enumeration order. The first
    move initializes the best; a later move replaces it only with a strictly
    greater score, so ties keep the earliest move.

    Args:
        rules:       Rules engine holding the live position. Left unchanged.
        depth:       Plies to search, counting the root move. Must be >= 1.
        perspective: Color to optimize for. Defaults to the side to move.
        stats:       Optional counters; best_score is set on return.
        prune:       Passed through to minimax().

    Returns:
        A move from rules.legal_moves(), or None when there are no legal
        moves (checkmate or stalemate). None is not an error.

    Raises:
        ValueError: depth < 1.
    """
    if depth < MIN_DEPTH:
        raise ValueError(f"search depth must be >= {MIN_DEPTH}, got {depth}")

    moves = rules.legal_moves()
    if not moves:
        return None

    if perspective is None:
        perspective = rules.turn()
    # The root side may differ from the perspective when a caller asks for
    # the opponent's view; the root then minimizes.
    root_maximizing = rules.turn() == perspective

    alpha, beta = -INFINITY, INFINITY
    best_move: Optional[chess.Move] = None
    best_score = 0

    for move in moves:
        rules.apply(move)
        score = minimax(
            rules, depth - 1, alpha, beta, not root_maximizing, perspective, stats, prune
        )
        rules.undo()

        if root_maximizing:
            better = best_move is None or score > best_score
        else:
            better = best_move is None or score < best_score
        if better:
            best_move = move
            best_score = score
            if prune:
                if root_maximizing:
                    alpha = max(alpha, best_score)
                else:
                    beta = min(beta, best_score)

    if stats is not None:
        stats.best_score = best_score
    return best_move


def random_move(
    rules: RulesEngine,
    rng: Optional[random.Random] = None,
) -> Optional[chess.Move]:
    """Return a uniformly random legal move, or None if there is none."""
    moves = rules.legal_moves()
    if not moves:
        return None
    return (rng or random).choice(moves)


class Bot:
    """
    A configured bot opponent.

    Attributes:
        strategy: "minimax" (alpha-beta search) or "random".
        depth:    Search depth for the minimax strategy.
        rng:      Random source for the random strategy.
    """

    def __init__(
        self,
        strategy: str = MINIMAX,
        depth: int = DEFAULT_DEPTH,
        rng: Optional[random.Random] = None,
    ) -> None:
        if strategy not in BOT_STRATEGIES:
            raise ValueError(f"unknown bot strategy: {strategy!r}")
        if depth < MIN_DEPTH:
            raise ValueError(f"search depth must be >= {MIN_DEPTH}, got {depth}")
        self.strategy = strategy
        self.depth = depth
        self.rng = rng or random.Random()

    def choose_move(
        self,
        rules: RulesEngine,
        stats: Optional[SearchStats] = None,
    ) -> Optional[chess.Move]:
        if self.strategy == MINIMAX:
            return find_best_move(rules, self.depth, stats=stats)
        return random_move(rules, self.rng)
