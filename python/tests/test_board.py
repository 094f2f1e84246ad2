"""Board model tests — permutation validation and queries."""

from __future__ import annotations

import pytest

from backend.models.board import Board, InvalidBoardError


# -- construction -------------------------------------------------------------


def test_from_flat_keeps_order() -> None:
    board = Board.from_flat(3, [2, 0, 1, 3, 4, 5, 6, 7, 8])
    assert board.pieces == [2, 0, 1, 3, 4, 5, 6, 7, 8]
    assert board.cell_count == 9


def test_from_flat_copies_input() -> None:
    flat = list(range(4))
    board = Board.from_flat(2, flat)
    flat[0] = 99
    assert board.pieces == [0, 1, 2, 3]


@pytest.mark.parametrize(
    "size, flat",
    [
        (3, [0, 1, 2]),
        (2, [0, 1, 2, 2]),
        (2, [0, 1, 2, 4]),
        (2, [-1, 0, 1, 2]),
        (0, []),
    ],
    ids=["short", "duplicate", "gap", "negative", "empty"],
)
def test_from_flat_rejects_non_permutations(size: int, flat: list[int]) -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_flat(size, flat)


def test_invalid_board_error_is_value_error() -> None:
    assert issubclass(InvalidBoardError, ValueError)


# -- queries ------------------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5])
def test_identity_is_solved(size: int) -> None:
    board = Board.solved(size)
    assert board.is_solved()
    assert board.correct_count() == size * size


def test_solved_iff_identity() -> None:
    board = Board.from_flat(3, [0, 1, 2, 3, 4, 5, 6, 8, 7])
    assert not board.is_solved()
    assert board.correct_count() == 7
    assert board.is_piece_correct(0)
    assert not board.is_piece_correct(7)


def test_home_of_uses_piece_value() -> None:
    board = Board.solved(4)
    assert board.home_of(0) == (0, 0)
    assert board.home_of(5) == (1, 1)
    assert board.home_of(15) == (3, 3)
    assert board.slot_of(2, 3) == 11


# -- mutation -----------------------------------------------------------------


def test_swap_exchanges_slots() -> None:
    board = Board.solved(3)
    board.swap(0, 8)
    assert board.pieces[0] == 8
    assert board.pieces[8] == 0


def test_swap_out_of_range_raises() -> None:
    board = Board.solved(3)
    with pytest.raises(IndexError):
        board.swap(0, 9)
    assert board.is_solved()


def test_copy_is_independent() -> None:
    board = Board.solved(3)
    clone = board.copy()
    clone.swap(0, 1)
    assert board.is_solved()
    assert not clone.is_solved()
