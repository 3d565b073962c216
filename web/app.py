"""
FastAPI web application for the chess game.

Exposes a JSON API for the browser board: create a game, click squares,
ask the bot for its reply, undo, reset, run the clock, and the room-code
handshake for two-player games. Serves the static board page.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like bot search.
- One lock per session: the bot searches the session's live position via
  apply/undo, so no other request may touch that session until it is done.
- Static files mounted LAST: route registration is first-match, so API routes
  must be registered before the StaticFiles catch-all.
- Sessions live in process memory until the page ends them with
  DELETE /api/sessions/{id} (which also closes the game's room). Sessions
  abandoned without that call are never evicted, and all are lost on restart.
"""

import logging
import threading
import uuid
from pathlib import Path
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, field_validator

from engine.constants import (
    BOT_STRATEGIES,
    DEFAULT_DEPTH,
    MAX_BOT_DEPTH,
    MIN_DEPTH,
    MINIMAX,
    WHITE,
)
from engine.search import Bot
from game.constants import BOT_MOVE_DELAY_MS, COLORS, GAME_MODES, MODE_BOT, MODE_ONLINE
from game.rooms import RoomFull, RoomNotFound, RoomRegistry
from game.session import GameSession

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

# Absolute path resolved at import time, independent of the working directory.
_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Chess Arena", version="1.0.0")


class SessionStore:
    """
    In-memory sessions, each paired with the lock that serializes it, and
    the room code -> session id map for online games.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[GameSession, threading.Lock]] = {}
        self._room_sessions: dict[str, str] = {}
        self._lock = threading.Lock()

    def add(self, session: GameSession, room_code: Optional[str] = None) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = (session, threading.Lock())
            if room_code is not None:
                self._room_sessions[room_code] = session_id
        return session_id

    def get(self, session_id: str) -> tuple[GameSession, threading.Lock]:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
        return entry

    def room_session(self, room_code: str) -> str:
        with self._lock:
            session_id = self._room_sessions.get(room_code)
        if session_id is None:
            raise HTTPException(status_code=404, detail=f"Unknown room: {room_code}")
        return session_id

    def remove(self, session_id: str) -> Optional[str]:
        """
        Drop a session. Returns the code of the room it belonged to, if any.

        Raises:
            HTTPException 404: Unknown session.
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
            for code, sid in list(self._room_sessions.items()):
                if sid == session_id:
                    del self._room_sessions[code]
                    return code
        return None


_store = SessionStore()
_rooms = RoomRegistry()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class NewGameRequest(BaseModel):
    """
    Fields:
        mode: "bot" or "local". Online games are created through /api/rooms.
        player_color: The human's color against the bot.
        bot_depth: Search depth, clamped to [MIN_DEPTH, MAX_BOT_DEPTH].
        bot_strategy: "minimax" or "random".
    """

    mode: str = MODE_BOT
    player_color: str = WHITE
    bot_depth: int = DEFAULT_DEPTH
    bot_strategy: str = MINIMAX

    @field_validator("mode")
    @classmethod
    def check_mode(cls, v: str) -> str:
        if v not in GAME_MODES or v == MODE_ONLINE:
            raise ValueError(f"mode must be one of: bot, local (got {v!r})")
        return v

    @field_validator("player_color")
    @classmethod
    def check_color(cls, v: str) -> str:
        if v not in COLORS:
            raise ValueError(f"player_color must be white or black (got {v!r})")
        return v

    @field_validator("bot_depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp bot_depth to a safe operating range."""
        return max(MIN_DEPTH, min(v, MAX_BOT_DEPTH))

    @field_validator("bot_strategy")
    @classmethod
    def check_strategy(cls, v: str) -> str:
        if v not in BOT_STRATEGIES:
            raise ValueError(f"bot_strategy must be one of {BOT_STRATEGIES} (got {v!r})")
        return v


class ClickRequest(BaseModel):
    square: str
    color: Optional[str] = None

    @field_validator("square")
    @classmethod
    def check_square(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in chess.SQUARE_NAMES:
            raise ValueError(f"not a square: {v!r}")
        return v

    @field_validator("color")
    @classmethod
    def check_color(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in COLORS:
            raise ValueError(f"color must be white or black (got {v!r})")
        return v


class TickRequest(BaseModel):
    seconds: int = 1

    @field_validator("seconds")
    @classmethod
    def clamp_seconds(cls, v: int) -> int:
        return max(0, min(v, 3600))


class ClockView(BaseModel):
    white: str
    black: str
    white_seconds: int
    black_seconds: int
    running: bool


class SessionView(BaseModel):
    """
    Everything the board page needs to redraw.

    Fields:
        board: 8x8 piece glyphs, rank 8 first, "" for empty squares.
        targets: Destinations of the selected piece, "move" or "capture".
        last_move: Last move in UCI notation, or None.
        bot_delay_ms: How long the page waits before requesting a bot move.
    """

    session_id: str
    mode: str
    player_color: str
    board: list[list[str]]
    fen: str
    turn: str
    status: str
    game_over: bool
    selected: Optional[str]
    targets: dict[str, str]
    last_move: Optional[str]
    bot_to_move: bool
    bot_delay_ms: int
    clock: ClockView


class RoomView(BaseModel):
    code: str
    session_id: str
    color: str
    opponent_joined: bool


def _view(session_id: str, session: GameSession) -> SessionView:
    clock = session.clock
    display = clock.display()
    last = session.last_move
    return SessionView(
        session_id=session_id,
        mode=session.mode,
        player_color=session.player_color,
        board=session.board_glyphs(),
        fen=session.rules.fen(),
        turn=session.rules.turn(),
        status=session.status(),
        game_over=session.is_over,
        selected=session.selected,
        targets=session.targets,
        last_move=last.uci() if last is not None else None,
        bot_to_move=session.is_bot_turn,
        bot_delay_ms=BOT_MOVE_DELAY_MS,
        clock=ClockView(
            white=display["white"],
            black=display["black"],
            white_seconds=clock.remaining["white"],
            black_seconds=clock.remaining["black"],
            running=clock.running,
        ),
    )


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.post("/api/sessions", response_model=SessionView)
def api_new_session(request: NewGameRequest) -> SessionView:
    """Start a new game against the bot or between two players on one board."""
    bot = Bot(strategy=request.bot_strategy, depth=request.bot_depth)
    session = GameSession(mode=request.mode, player_color=request.player_color, bot=bot)
    session_id = _store.add(session)
    _log.info(
        "session %s created mode=%s player=%s depth=%d",
        session_id,
        request.mode,
        request.player_color,
        request.bot_depth,
    )
    return _view(session_id, session)


@app.get("/api/sessions/{session_id}", response_model=SessionView)
def api_get_session(session_id: str) -> SessionView:
    session, lock = _store.get(session_id)
    with lock:
        return _view(session_id, session)


@app.post("/api/sessions/{session_id}/click", response_model=SessionView)
def api_click(session_id: str, request: ClickRequest) -> SessionView:
    """Select a piece, switch the selection, or play the selected piece's move."""
    session, lock = _store.get(session_id)
    with lock:
        move = session.click_square(request.square, request.color)
        if move is not None:
            _log.info("session %s move=%s", session_id, move.uci())
        return _view(session_id, session)


@app.post("/api/sessions/{session_id}/bot-move", response_model=SessionView)
def api_bot_move(session_id: str) -> SessionView:
    """
    Let the bot play its reply.

    Raises:
        HTTPException 409: It is not the bot's turn, or the game is over.
        HTTPException 500: Engine failure.
    """
    session, lock = _store.get(session_id)
    with lock:
        if not session.is_bot_turn:
            raise HTTPException(status_code=409, detail="It is not the bot's turn")
        try:
            session.play_bot_move()
        except Exception as exc:
            _log.exception("Bot search failed for FEN=%s", session.rules.fen())
            raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc
        return _view(session_id, session)


@app.post("/api/sessions/{session_id}/undo", response_model=SessionView)
def api_undo(session_id: str) -> SessionView:
    session, lock = _store.get(session_id)
    with lock:
        session.undo()
        return _view(session_id, session)


@app.post("/api/sessions/{session_id}/reset", response_model=SessionView)
def api_reset(session_id: str) -> SessionView:
    session, lock = _store.get(session_id)
    with lock:
        session.reset()
        return _view(session_id, session)


@app.post("/api/sessions/{session_id}/tick", response_model=SessionView)
def api_tick(session_id: str, request: TickRequest) -> SessionView:
    """Charge elapsed seconds to the side to move."""
    session, lock = _store.get(session_id)
    with lock:
        session.tick(request.seconds)
        return _view(session_id, session)


@app.delete("/api/sessions/{session_id}", status_code=204)
def api_end_session(session_id: str) -> None:
    """Forget a finished or abandoned game, closing its room if it has one."""
    _, lock = _store.get(session_id)
    with lock:
        code = _store.remove(session_id)
        if code is not None:
            _rooms.close_room(code)
    _log.info("session %s ended", session_id)


@app.post("/api/rooms", response_model=RoomView)
def api_create_room() -> RoomView:
    """Open a room. The creator plays white once an opponent joins."""
    room = _rooms.create_room()
    session_id = _store.add(room.session, room_code=room.code)
    return RoomView(code=room.code, session_id=session_id, color=WHITE, opponent_joined=False)


@app.get("/api/rooms/{code}", response_model=RoomView)
def api_get_room(code: str) -> RoomView:
    try:
        room = _rooms.get(code)
    except RoomNotFound as exc:
        raise HTTPException(status_code=404, detail=f"Unknown room: {code}") from exc
    return RoomView(
        code=room.code,
        session_id=_store.room_session(room.code),
        color=room.session.player_color,
        opponent_joined=room.opponent_joined,
    )


@app.post("/api/rooms/{code}/join", response_model=RoomView)
def api_join_room(code: str) -> RoomView:
    """
    Join an open room as black. Starts the shared game under its session lock.

    Raises:
        HTTPException 404: Unknown room code.
        HTTPException 409: The room already has two players.
    """
    code = code.strip().upper()
    session_id = _store.room_session(code)
    _, lock = _store.get(session_id)
    with lock:
        try:
            room, color = _rooms.join_room(code)
        except RoomNotFound as exc:
            raise HTTPException(status_code=404, detail=f"Unknown room: {code}") from exc
        except RoomFull as exc:
            raise HTTPException(status_code=409, detail=f"Room is full: {code}") from exc
    return RoomView(code=room.code, session_id=session_id, color=color, opponent_joined=True)


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the board page."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount: MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
