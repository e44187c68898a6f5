"""
Frame driver shared by hosts

Holds the per-frame decisions a host makes around a Session: tick while
the game runs, announce the result once when it ends, restart on request.
Kept free of any window toolkit so it runs headless.
"""

from typing import Optional

from .session import Session, SessionSnapshot, InputState


def game_over_message(snapshot: SessionSnapshot) -> str:
    return f"Game Over! Final Score: {snapshot.score}, Collected: {snapshot.collected}"


class FrameDriver:
    """Drives one Session from a host frame loop"""

    def __init__(self, session: Session):
        self.session = session
        self.snapshot: SessionSnapshot = session.snapshot()
        self._announced = False

    def advance(self, dt_ms: float, keys: InputState) -> Optional[str]:
        """
        Run one frame.

        Returns the game-over summary on the first frame after the session
        ends, None otherwise. A finished session is not ticked.
        """
        if self.session.is_game_over():
            if self._announced:
                return None
            self._announced = True
            return game_over_message(self.snapshot)

        self.snapshot = self.session.tick(dt_ms, keys)
        return None

    def restart(self) -> bool:
        """Reset the session if it has ended; a running game is left alone"""
        if not self.session.is_game_over():
            return False
        self.session.reset()
        self.snapshot = self.session.snapshot()
        self._announced = False
        return True
