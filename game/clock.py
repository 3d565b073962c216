"""
Two-sided countdown clock.

The clock does not own a timer. Whoever drives the game (the browser, via the
web API) reports elapsed whole seconds with tick(), and the seconds are
charged to the side to move. When a side reaches zero the clock stops and
records the flag; the opponent wins on time.
"""

from typing import Optional

from engine.constants import BLACK, WHITE
from game.constants import INITIAL_CLOCK_SECONDS


def format_time(seconds: int) -> str:
    """Render seconds as m:ss, e.g. 600 -> "10:00", 65 -> "1:05"."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins}:{secs:02d}"


class ChessClock:
    """
    Attributes:
        initial_seconds: Starting budget for each side.
        remaining:       Seconds left per color name.
        running:         Whether tick() currently charges time.
        flagged:         Color that ran out of time, or None.
    """

    def __init__(self, initial_seconds: int = INITIAL_CLOCK_SECONDS) -> None:
        if initial_seconds <= 0:
            raise ValueError(f"clock needs a positive budget, got {initial_seconds}")
        self.initial_seconds = initial_seconds
        self.remaining: dict[str, int] = {}
        self.running = False
        self.flagged: Optional[str] = None
        self.reset()

    def reset(self) -> None:
        """Refill both sides and stop the clock."""
        self.remaining = {WHITE: self.initial_seconds, BLACK: self.initial_seconds}
        self.running = False
        self.flagged = None

    def start(self) -> None:
        # A flagged clock stays stopped until reset().
        if self.flagged is None:
            self.running = True

    def stop(self) -> None:
        self.running = False

    def tick(self, turn: str, seconds: int = 1) -> Optional[str]:
        """
        Charge `seconds` to `turn`.

        Returns:
            The flagged color if this tick ran it out of time, else None.
        """
        if seconds < 0:
            raise ValueError(f"cannot tick a negative duration: {seconds}")
        if not self.running:
            return None
        left = self.remaining[turn] - seconds
        if left <= 0:
            self.remaining[turn] = 0
            self.flagged = turn
            self.stop()
            return turn
        self.remaining[turn] = left
        return None

    @property
    def winner_on_time(self) -> Optional[str]:
        if self.flagged is None:
            return None
        return BLACK if self.flagged == WHITE else WHITE

    def display(self) -> dict[str, str]:
        return {color: format_time(left) for color, left in self.remaining.items()}
