"""
Game-layer constants: clock, bot pacing, room codes and piece glyphs.
"""

import string

from engine.constants import BISHOP, BLACK, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE

# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

MODE_BOT: str = "bot"        # human vs the bot on one board
MODE_LOCAL: str = "local"    # two humans sharing one board
MODE_ONLINE: str = "online"  # two humans joined through a room code
GAME_MODES: tuple[str, ...] = (MODE_BOT, MODE_LOCAL, MODE_ONLINE)

COLORS: tuple[str, ...] = (WHITE, BLACK)

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

INITIAL_CLOCK_SECONDS: int = 600  # 10 minutes per side

# ---------------------------------------------------------------------------
# Bot pacing
# ---------------------------------------------------------------------------
# The browser waits this long after the human's move before asking for the
# bot's reply, so the board repaints before the search blocks the request.
BOT_MOVE_DELAY_MS: int = 500

# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

ROOM_CODE_LENGTH: int = 6
ROOM_CODE_ALPHABET: str = string.digits + string.ascii_uppercase

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

PIECE_GLYPHS: dict[tuple[str, str], str] = {
    (KING, WHITE): "♔", (QUEEN, WHITE): "♕", (ROOK, WHITE): "♖",
    (BISHOP, WHITE): "♗", (KNIGHT, WHITE): "♘", (PAWN, WHITE): "♙",
    (KING, BLACK): "♚", (QUEEN, BLACK): "♛", (ROOK, BLACK): "♜",
    (BISHOP, BLACK): "♝", (KNIGHT, BLACK): "♞", (PAWN, BLACK): "♟",
}

TARGET_MOVE: str = "move"
TARGET_CAPTURE: str = "capture"
