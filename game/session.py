"""
GameSession: one game of chess as seen by the UI.

A session owns everything the browser game used to keep in free-standing
globals: the rules engine (position), the current square selection, the
clock, the game mode and the bot. The web layer keeps one session per game
and passes it to every handler; the bot searches the session's own rules
engine.

Click-to-move follows the usual board-UI rules:
    - Clicking one of the side-to-move's pieces selects it and exposes its
      legal destinations as targets ("move" or "capture").
    - With a piece selected, clicking a legal destination plays the move.
      Pawns reaching the last rank always promote to a queen.
    - Clicking another own piece switches the selection; clicking anything
      else clears it.
"""

import logging
import time
from typing import Optional

import chess

from engine.constants import BLACK, WHITE
from engine.rules import RulesEngine
from engine.search import Bot, SearchStats
from game.clock import ChessClock
from game.constants import (
    COLORS,
    GAME_MODES,
    MODE_BOT,
    MODE_ONLINE,
    PIECE_GLYPHS,
    TARGET_CAPTURE,
    TARGET_MOVE,
)

_log = logging.getLogger(__name__)


def opponent(color: str) -> str:
    return BLACK if color == WHITE else WHITE


class GameSession:
    """
    Attributes:
        mode:         "bot", "local" or "online".
        player_color: The human's color in bot mode, the host's color online.
        rules:        Rules engine holding the live position.
        clock:        Countdown clock for both sides.
        bot:          Bot opponent (bot mode only, else None).
        selected:     Name of the selected square, or None.
        targets:      Legal destinations of the selected piece, square name to
                      "move" or "capture".
        waiting:      True while an online game waits for its second player;
                      no clicks are accepted and the clock does not run.
    """

    def __init__(
        self,
        mode: str = MODE_BOT,
        player_color: str = WHITE,
        bot: Optional[Bot] = None,
        clock: Optional[ChessClock] = None,
        rules: Optional[RulesEngine] = None,
        waiting: bool = False,
    ) -> None:
        if mode not in GAME_MODES:
            raise ValueError(f"unknown game mode: {mode!r}")
        if player_color not in COLORS:
            raise ValueError(f"unknown color: {player_color!r}")
        self.mode = mode
        self.player_color = player_color
        self.rules = rules or RulesEngine()
        self.clock = clock or ChessClock()
        self.bot = (bot or Bot()) if mode == MODE_BOT else None
        self.selected: Optional[str] = None
        self.targets: dict[str, str] = {}
        self.waiting = waiting
        if not waiting:
            self.clock.start()

    # -----------------------------------------------------------------------
    # Game controls
    # -----------------------------------------------------------------------

    def reset(self) -> None:
        """Back to the starting position with full clocks, running."""
        self.rules.reset()
        self.clock.reset()
        self.clear_selection()
        if not self.waiting:
            self.clock.start()

    def undo(self) -> list[chess.Move]:
        """
        Take back the last move; in bot mode, the bot's reply as well so the
        human is to move again. Returns the undone moves, most recent first.
        """
        undone = []
        plies = 2 if self.mode == MODE_BOT else 1
        for _ in range(plies):
            if not self.rules.history():
                break
            undone.append(self.rules.undo())
        self.clear_selection()
        # Taking back a mating or drawing move resumes the game.
        if not self.is_over and not self.waiting:
            self.clock.start()
        return undone

    def begin(self) -> None:
        """Start a game that was waiting for its second player."""
        self.waiting = False
        self.clock.start()

    def tick(self, seconds: int = 1) -> Optional[str]:
        """Charge elapsed seconds to the side to move. Returns a flagged color."""
        if self.rules.is_game_over():
            return None
        flagged = self.clock.tick(self.rules.turn(), seconds)
        if flagged is not None:
            _log.info("%s flagged; %s wins on time", flagged, opponent(flagged))
        return flagged

    # -----------------------------------------------------------------------
    # Click-to-move
    # -----------------------------------------------------------------------

    def click_square(self, square: str, color: Optional[str] = None) -> Optional[chess.Move]:
        """
        Handle a click on `square` by the player of `color`.

        `color` identifies the acting player in online mode and defaults to
        player_color. Raises ValueError for a malformed square name.

        Returns:
            The move played, or None if the click only changed the selection
            (or was ignored because it is not this player's turn).
        """
        chess.parse_square(square)
        if not self._may_act(color):
            return None

        turn = self.rules.turn()
        piece = self.rules.piece_at(square)

        # An own piece is always a selection, never a destination. python-chess
        # would otherwise read king-takes-own-rook as castling.
        if piece is not None and piece[1] == turn:
            self.select_square(square)
            return None
        if self.selected is not None:
            move = self._play_between(self.selected, square)
            self.clear_selection()
            if move is not None:
                self._after_move()
                return move
        return None

    def select_square(self, square: str) -> None:
        self.clear_selection()
        self.selected = square
        for move in self.rules.legal_moves(square):
            kind = TARGET_CAPTURE if self.rules.is_capture(move) else TARGET_MOVE
            self.targets[chess.square_name(move.to_square)] = kind

    def clear_selection(self) -> None:
        self.selected = None
        self.targets = {}

    def _may_act(self, color: Optional[str]) -> bool:
        if self.is_over or self.waiting:
            return False
        turn = self.rules.turn()
        if self.mode == MODE_ONLINE:
            return (color or self.player_color) == turn
        if self.mode == MODE_BOT:
            return turn == self.player_color
        return True

    def _play_between(self, from_name: str, to_name: str) -> Optional[chess.Move]:
        """Play the legal move between two squares, if any. Pawns auto-queen."""
        from_sq, to_sq = chess.parse_square(from_name), chess.parse_square(to_name)
        for promotion in (None, chess.QUEEN):
            played = self.rules.apply(chess.Move(from_sq, to_sq, promotion))
            if played is not None:
                return played
        return None

    def _after_move(self) -> None:
        if self.rules.is_game_over():
            self.clock.stop()
            _log.info("game over: %s", self.status())

    # -----------------------------------------------------------------------
    # Bot
    # -----------------------------------------------------------------------

    @property
    def bot_color(self) -> Optional[str]:
        return opponent(self.player_color) if self.bot is not None else None

    @property
    def is_bot_turn(self) -> bool:
        return self.bot is not None and not self.is_over and self.rules.turn() == self.bot_color

    def play_bot_move(self) -> Optional[chess.Move]:
        """
        Let the bot move if it is its turn. Returns the move, or None when it
        is not the bot's turn or it has no legal move.
        """
        if not self.is_bot_turn:
            return None
        stats = SearchStats()
        start = time.monotonic()
        move = self.bot.choose_move(self.rules, stats)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        if move is None:
            return None
        _log.info(
            "bot move=%s strategy=%s depth=%d score=%d nodes=%d time=%dms",
            move.uci(),
            self.bot.strategy,
            self.bot.depth,
            stats.best_score,
            stats.node_count,
            elapsed_ms,
        )
        self.rules.apply(move)
        self.clear_selection()
        self._after_move()
        return move

    # -----------------------------------------------------------------------
    # Views
    # -----------------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.rules.is_game_over() or self.clock.flagged is not None

    @property
    def last_move(self) -> Optional[chess.Move]:
        history = self.rules.history()
        return history[-1] if history else None

    def status(self) -> str:
        """One-line game status as shown above the board."""
        rules = self.rules
        if self.waiting:
            return "Waiting for opponent..."
        if rules.is_checkmate():
            return f"Checkmate! {opponent(rules.turn()).capitalize()} wins!"
        if self.clock.flagged is not None:
            return f"{self.clock.winner_on_time.capitalize()} wins on time!"
        if rules.is_stalemate():
            return "Stalemate!"
        if rules.is_draw():
            return "Draw!"
        if rules.is_check():
            return "Check!"
        return f"{rules.turn().capitalize()} to move"

    def board_glyphs(self) -> list[list[str]]:
        """8x8 grid of piece glyphs ("" for empty), rank 8 first."""
        return [
            [PIECE_GLYPHS[cell] if cell is not None else "" for cell in row]
            for row in self.rules.board_snapshot()
        ]
