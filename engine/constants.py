"""
Engine constants: piece values, terminal scores, and search parameters.

All numeric constants used by the bot are defined here so that the evaluator
and the search never introduce their own magic numbers.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
The king carries a large value so that material sums stay well defined, but
since both sides always have exactly one king the two values cancel out.
"""

import os

import chess

# ---------------------------------------------------------------------------
# Names used by the board snapshot
# ---------------------------------------------------------------------------

WHITE: str = "white"
BLACK: str = "black"

PAWN: str = "pawn"
KNIGHT: str = "knight"
BISHOP: str = "bishop"
ROOK: str = "rook"
QUEEN: str = "queen"
KING: str = "king"

# python-chess piece type / color constants to snapshot names.
PIECE_NAMES: dict[int, str] = {
    chess.PAWN:   PAWN,
    chess.KNIGHT: KNIGHT,
    chess.BISHOP: BISHOP,
    chess.ROOK:   ROOK,
    chess.QUEEN:  QUEEN,
    chess.KING:   KING,
}

COLOR_NAMES: dict[bool, str] = {
    chess.WHITE: WHITE,
    chess.BLACK: BLACK,
}

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PIECE_VALUES: dict[str, int] = {
    PAWN:   100,
    KNIGHT: 320,
    BISHOP: 330,
    ROOK:   500,
    QUEEN:  900,
    KING:   20_000,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Checkmate dominates any reachable material total (at most ~24k per side
# once the kings cancel). Integers only, so alpha-beta comparisons are exact.

CHECKMATE_SCORE: int = 50_000

# Bounds for the alpha-beta window. Strictly outside every reachable score.
INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

MIN_DEPTH: int = 1
MAX_BOT_DEPTH: int = 5

# CHESS_BOT_DEPTH overrides BASE_DEPTH for the
# web app; values outside [MIN_DEPTH, MAX_BOT_DEPTH] are clamped and values
# that are not integers are ignored.
BASE_DEPTH: int = 3


def depth_from_env(environ=os.environ) -> int:
    """Default bot depth, taken from CHESS_BOT_DEPTH when it holds an integer."""
    try:
        depth = int(environ.get("CHESS_BOT_DEPTH", BASE_DEPTH))
    except ValueError:
        return BASE_DEPTH
    return max(MIN_DEPTH, min(depth, MAX_BOT_DEPTH))


DEFAULT_DEPTH: int = depth_from_env()

MINIMAX: str = "minimax"
RANDOM: str = "random"
BOT_STRATEGIES: tuple[str, ...] = (MINIMAX, RANDOM)
