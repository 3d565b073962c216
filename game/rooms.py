"""
Room-code handshake for two-player games.

A host creates a room and receives a short code plus the white pieces. A
guest joins with the code and receives black. Both players then act on the
same GameSession; the session's online-mode turn guard keeps each player to
their own color. Listeners registered on a room are told when the opponent
joins, which is when the host's clock starts.

The registry lives in one process. There is no transport: players on other
machines reach it only through whatever serves the web API.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from engine.constants import BLACK, WHITE
from game.constants import MODE_ONLINE, ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
from game.session import GameSession

_log = logging.getLogger(__name__)


class RoomNotFound(KeyError):
    """No room is registered under the given code."""


class RoomFull(Exception):
    """The room already has both players."""


@dataclass
class Room:
    """
    Attributes:
        code:            Upper-case room code shared with the opponent.
        session:         The shared game.
        opponent_joined: Whether the guest has joined.
        listeners:       Callbacks run once, with the room, when the guest joins.
    """

    code: str
    session: GameSession
    opponent_joined: bool = False
    listeners: list[Callable[["Room"], None]] = field(default_factory=list)

    def on_opponent_joined(self, callback: Callable[["Room"], None]) -> None:
        self.listeners.append(callback)


class RoomRegistry:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.SystemRandom()
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()

    def _new_code(self) -> str:
        while True:
            code = "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code

    def create_room(self) -> Room:
        """Open a room; the host plays white. The game starts when the guest joins."""
        session = GameSession(mode=MODE_ONLINE, player_color=WHITE, waiting=True)
        with self._lock:
            room = Room(code=self._new_code(), session=session)
            self._rooms[room.code] = room
        room.on_opponent_joined(_start_game)
        _log.info("room %s created", room.code)
        return room

    def get(self, code: str) -> Room:
        room = self._rooms.get(code.strip().upper())
        if room is None:
            raise RoomNotFound(code)
        return room

    def join_room(self, code: str) -> tuple[Room, str]:
        """
        Join a room as the guest and notify the room's listeners.

        The caller must hold whatever guards the room's session, since the
        listeners start its game.

        Returns:
            (room, color) where color is always black.

        Raises:
            RoomNotFound: unknown code.
            RoomFull:     the guest seat is taken.
        """
        with self._lock:
            room = self.get(code)
            if room.opponent_joined:
                raise RoomFull(room.code)
            room.opponent_joined = True
        for callback in room.listeners:
            callback(room)
        return room, BLACK

    def close_room(self, code: str) -> Optional[Room]:
        """Forget a room. Returns it, or None if the code was unknown."""
        with self._lock:
            room = self._rooms.pop(code.strip().upper(), None)
        if room is not None:
            _log.info("room %s closed", room.code)
        return room


def _start_game(room: Room) -> None:
    _log.info("room %s: opponent joined", room.code)
    room.session.begin()
