from __future__ import annotations


class TetrisError(Exception):
    """Base class for errors raised by the session layer."""


class SessionCreationError(TetrisError):
    """A session could not be built (invalid config or allocation failure)."""


class GameNotStartedError(TetrisError):
    """An operation needed an active piece but the game was never started."""
