"""Core gameplay logic — applies swaps, runs the clock, checks the win."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.engine.gametimer import ManualTicker, Ticker
from backend.models.board import Board, InvalidBoardError
from backend.models.picture import resolve_image_ref
from backend.settings import DEFAULT_SIZE, GRID_SIZES

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    SOLVED = "solved"


class GamePlay:
    """Orchestrates a picture puzzle session.

    Idle → Running on the first swap, Running → Solved when every piece is
    home.  Only :meth:`new_game` leaves Solved.
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        image: str | None = None,
        *,
        rng: random.Random | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        self.image = resolve_image_ref(image)
        self._rng = rng
        self._ticker: Ticker = ticker if ticker is not None else ManualTicker()
        self.size = size
        self.state: GameState
        self.new_game(size)

    @classmethod
    def from_board(
        cls,
        board: Board,
        image: str | None = None,
        *,
        rng: random.Random | None = None,
        ticker: Ticker | None = None,
    ) -> GamePlay:
        """Create a game session from an existing board (e.g. a fixed shuffle)."""
        obj = object.__new__(cls)
        obj.image = resolve_image_ref(image)
        obj._rng = rng
        obj._ticker = ticker if ticker is not None else ManualTicker()
        obj.size = board.size
        obj.state = GameState(board)
        return obj

    # -- session control ------------------------------------------------------

    def new_game(self, size: int | None = None) -> None:
        """Reshuffle and reset moves, clock, and selection."""
        size = self.size if size is None else size
        if size not in GRID_SIZES:
            raise InvalidBoardError(
                f"Unsupported grid size {size}; choose one of {GRID_SIZES}."
            )
        self._ticker.stop()
        self.size = size
        self.state = GameState(GameGenerator.generate(size, self._rng))
        logger.info("New %d×%d game with image %s", size, size, self.image)

    def set_size(self, size: int) -> None:
        self.new_game(size)

    def use_image(self, raw: str | None) -> str:
        """Switch to the image behind *raw* (blank → default) and restart."""
        self.image = resolve_image_ref(raw)
        self.new_game()
        return self.image

    def close(self) -> None:
        """Tear down: cancel the clock unconditionally."""
        self._ticker.stop()

    # -- moves ----------------------------------------------------------------

    def swap(self, a: int, b: int) -> bool:
        """Exchange the pieces in slots *a* and *b*.

        Any two distinct slots may be swapped.  Returns True if the swap
        was applied and counted as a move.
        """
        if a == b or self.is_won:
            return False

        self.state.board.swap(a, b)
        self.state.increment_moves()
        self._set_running(True)

        if self.state.is_solved:
            self._set_running(False)
            logger.info(
                "Solved in %ds with %d moves", self.state.seconds, self.state.moves
            )
        return True

    # -- clock ----------------------------------------------------------------

    def tick(self) -> bool:
        """Count one elapsed second; ignored unless the game is running."""
        return self.state.advance()

    def _set_running(self, running: bool) -> None:
        if running == self.state.running:
            return
        self.state.running = running
        if running:
            self._ticker.start(self.tick)
        else:
            self._ticker.stop()

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def phase(self) -> Phase:
        if self.is_won:
            return Phase.SOLVED
        if self.state.running:
            return Phase.RUNNING
        return Phase.IDLE

    @property
    def cell_count(self) -> int:
        return self.state.board.cell_count
