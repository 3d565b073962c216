"""
Rules Engine adapter over python-chess.

The bot never touches chess rules itself. Everything it needs (legal move
generation, make/unmake, game-over detection and a read-only view of the
board) goes through the small surface of RulesEngine, which delegates to a
chess.Board. Keeping the surface this narrow is what lets the search be
tested against a counting fake as well as against a real board.

Board snapshot layout:
    snapshot[row][col], row 0 = rank 8, col 0 = file a, matching the order a
    board is drawn top-down for White. Each cell is None or a
    (piece_type, color) tuple of plain strings, e.g. ("knight", "white").
"""

from typing import Optional

import chess

from engine.constants import COLOR_NAMES, PIECE_NAMES

Cell = Optional[tuple[str, str]]
BoardSnapshot = tuple[tuple[Cell, ...], ...]


def snapshot_of(board: chess.Board) -> BoardSnapshot:
    """Project a chess.Board onto an 8x8 grid of (piece_type, color) cells."""
    grid: list[list[Cell]] = [[None] * 8 for _ in range(8)]
    for sq, piece in board.piece_map().items():
        row = 7 - chess.square_rank(sq)
        col = chess.square_file(sq)
        grid[row][col] = (PIECE_NAMES[piece.piece_type], COLOR_NAMES[piece.color])
    return tuple(tuple(row) for row in grid)


class RulesEngine:
    """
    Chess rules collaborator backed by a single mutable chess.Board.

    Attributes:
        board: The live position. Owned by this object; callers that need to
               mutate it should go through apply() and undo().
    """

    def __init__(self, fen: str = chess.STARTING_FEN) -> None:
        self.board: chess.Board = chess.Board(fen)

    def reset(self) -> None:
        self.board.reset()

    def turn(self) -> str:
        """Color name of the side to move."""
        return COLOR_NAMES[self.board.turn]

    def legal_moves(self, square: Optional[str] = None) -> list[chess.Move]:
        """
        Legal moves in python-chess generation order.

        Args:
            square: Optional origin square name ("e2"). When given, only moves
                    starting on that square are returned. Raises ValueError
                    for a malformed square name.
        """
        if square is None:
            return list(self.board.legal_moves)
        from_mask = chess.BB_SQUARES[chess.parse_square(square)]
        return list(self.board.generate_legal_moves(from_mask=from_mask))

    def apply(self, move: chess.Move) -> Optional[chess.Move]:
        """
        Play a move. Returns the move as recorded in the history (king-takes-
        rook castling comes back as the king's two-square move), or None if
        it is not legal here.
        """
        if not self.board.is_legal(move):
            return None
        self.board.push(move)
        return self.board.peek()

    def undo(self) -> chess.Move:
        """Revert exactly one applied move. Raises IndexError if none."""
        return self.board.pop()

    def history(self) -> list[chess.Move]:
        return list(self.board.move_stack)

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self.board.is_stalemate()

    def is_check(self) -> bool:
        return self.board.is_check()

    def is_draw(self) -> bool:
        """
        Drawn by stalemate, insufficient material, the fifty-move rule or
        threefold repetition. The last two count as soon as they are
        claimable, which is how browser chess libraries report draws.
        """
        board = self.board
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.halfmove_clock >= 100
            or board.is_repetition(3)
        )

    def is_game_over(self) -> bool:
        return self.is_checkmate() or self.is_draw()

    def board_snapshot(self) -> BoardSnapshot:
        return snapshot_of(self.board)

    def piece_at(self, square: str) -> Cell:
        """(piece_type, color) on a named square, or None if it is empty."""
        piece = self.board.piece_at(chess.parse_square(square))
        if piece is None:
            return None
        return (PIECE_NAMES[piece.piece_type], COLOR_NAMES[piece.color])

    def is_capture(self, move: chess.Move) -> bool:
        return self.board.is_capture(move)

    def fen(self) -> str:
        return self.board.fen()
