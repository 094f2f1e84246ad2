"""Board model for the picture puzzle.

The board is a flat permutation: slot ``i`` holds the piece whose home
region of the source image is ``divmod(piece, size)``.
"""

from __future__ import annotations

from dataclasses import dataclass


class InvalidBoardError(ValueError):
    """Raised when a board is not a permutation of ``0..size²-1``."""


@dataclass
class Board:
    """Represents the puzzle board as a row-major permutation of pieces."""

    size: int
    pieces: list[int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major piece list.

        Example::

            Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
        """
        if size < 1:
            raise InvalidBoardError(f"Board size must be positive, got {size}.")
        if len(flat) != size * size:
            raise InvalidBoardError(
                f"Expected {size * size} pieces for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise InvalidBoardError(
                f"Pieces must be a permutation of 0..{size * size - 1}."
            )
        return cls(size=size, pieces=list(flat))

    @classmethod
    def solved(cls, size: int) -> Board:
        """Return the identity board (every piece in its home slot)."""
        return cls(size=size, pieces=list(range(size * size)))

    # -- queries --------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def get_piece(self, slot: int) -> int:
        return self.pieces[slot]

    def home_of(self, piece: int) -> tuple[int, int]:
        """Row and column of the image region *piece* belongs to."""
        return divmod(piece, self.size)

    def slot_of(self, row: int, col: int) -> int:
        return row * self.size + col

    def is_solved(self) -> bool:
        """Check if every slot holds its own piece."""
        return all(piece == slot for slot, piece in enumerate(self.pieces))

    def is_piece_correct(self, slot: int) -> bool:
        return self.pieces[slot] == slot

    def correct_count(self) -> int:
        return sum(1 for slot, piece in enumerate(self.pieces) if piece == slot)

    # -- mutation -------------------------------------------------------------

    def swap(self, a: int, b: int) -> None:
        """Exchange the pieces in slots *a* and *b*."""
        n = self.cell_count
        if not (0 <= a < n and 0 <= b < n):
            raise IndexError(f"Slot out of range for {n} cells: {a}, {b}")
        self.pieces[a], self.pieces[b] = self.pieces[b], self.pieces[a]

    def copy(self) -> Board:
        return Board(size=self.size, pieces=self.pieces[:])
