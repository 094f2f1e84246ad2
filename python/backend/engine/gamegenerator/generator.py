"""Generates shuffled picture puzzle boards."""

from __future__ import annotations

import random

from backend.models.board import Board


class GameGenerator:
    """Creates boards by shuffling the identity permutation."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (every piece in its home slot)."""
        return Board.solved(size)

    @staticmethod
    def shuffle(pieces: list[int], rng: random.Random | None = None) -> None:
        """Fisher–Yates shuffle *pieces* in-place."""
        rng = rng or random
        for i in range(len(pieces) - 1, 0, -1):
            j = rng.randint(0, i)
            pieces[i], pieces[j] = pieces[j], pieces[i]

    @staticmethod
    def generate(size: int, rng: random.Random | None = None) -> Board:
        """Return a random board of the given size that isn't already solved."""
        board = GameGenerator.solved(size)
        if board.cell_count < 2:
            return board

        GameGenerator.shuffle(board.pieces, rng)
        while board.is_solved():
            GameGenerator.shuffle(board.pieces, rng)

        return board
