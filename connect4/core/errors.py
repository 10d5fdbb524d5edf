# connect4/core/errors.py


class GameError(Exception):
    """Base class for every recoverable engine error."""


class InvalidMove(GameError, ValueError):
    """A disc cannot be dropped: the column is full or the round is over."""

    def __init__(self, column: int, reason: str = "column is full"):
        self.column = column
        self.reason = reason
        super().__init__(f"Invalid move: column {column} ({reason})")


class InvalidColumnIndex(GameError, ValueError):
    """Column index outside 0..6."""

    def __init__(self, column):
        self.column = column
        super().__init__(f"Column index out of range: {column!r}")


class NoLegalMove(GameError):
    """The search found nothing to play (board full or already decided)."""
