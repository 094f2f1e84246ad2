"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from backend.models.board import Board


class GameState:
    """Holds the current board, move counter, elapsed seconds, and selection."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.moves: int = 0
        self.seconds: int = 0
        self.running: bool = False
        self.armed: int | None = None

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> int:
        return self.seconds

    def advance(self) -> bool:
        """Count one second if the clock is running."""
        if not self.running:
            return False
        self.seconds += 1
        return True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
