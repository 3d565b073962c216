"""
Static material evaluation.

The bot scores a position purely by material: each piece is worth a fixed
number of centipawns (see engine.constants.PIECE_VALUES) and the score is the
sum over the engine's own pieces minus the sum over the opponent's. There are
no positional terms (king safety, mobility, pawn structure).

The score is always taken from an explicit perspective color, never from a
hardcoded side. The minimax search passes the same perspective down every
level of the tree, so a positive score means "good for the engine" at every
node regardless of whose turn it is there.

Checkmate overrides material: a mated perspective scores -CHECKMATE_SCORE and
a mated opponent scores +CHECKMATE_SCORE.
"""

from typing import Optional

from engine.constants import CHECKMATE_SCORE, PIECE_VALUES
from engine.rules import BoardSnapshot, RulesEngine


def evaluate(
    snapshot: BoardSnapshot,
    perspective: str,
    mated: Optional[str] = None,
) -> int:
    """
    Material balance of a snapshot from `perspective`'s point of view.

    Args:
        snapshot:    8x8 grid of (piece_type, color) cells or None.
        perspective: Color name the score is relative to ("white"/"black").
        mated:       Color name of the checkmated side, or None if the
                     position is not checkmate.

    Returns:
        Centipawns; positive = perspective is ahead. Exactly +/-CHECKMATE_SCORE
        when `mated` is set.

    Example:
        K+Q vs K with White to score from White's side evaluates to 900; the
        two kings cancel.
    """
    if mated is not None:
        return -CHECKMATE_SCORE if mated == perspective else CHECKMATE_SCORE

    score = 0
    for row in snapshot:
        for cell in row:
            if cell is None:
                continue
            piece_type, color = cell
            value = PIECE_VALUES[piece_type]
            score += value if color == perspective else -value
    return score


def evaluate_position(rules: RulesEngine, perspective: str) -> int:
    """Evaluate the live position of a rules engine. Does not modify it."""
    # In a checkmate position the side to move is the one that is mated.
    mated = rules.turn() if rules.is_checkmate() else None
    return evaluate(rules.board_snapshot(), perspective, mated)
