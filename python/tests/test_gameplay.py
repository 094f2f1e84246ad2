"""Board state manager tests — swaps, clock lifecycle, and session resets."""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import GamePlay, Phase
from backend.engine.gametimer import ManualTicker
from backend.models.board import Board, InvalidBoardError
from backend.models.picture import DEFAULT_IMAGE


# -- helpers ------------------------------------------------------------------


def _game(size: int = 3, seed: int = 7, ticker: ManualTicker | None = None) -> GamePlay:
    return GamePlay(size, rng=random.Random(seed), ticker=ticker or ManualTicker())


def _assert_bijection(game: GamePlay) -> None:
    n = game.size * game.size
    assert sorted(game.state.board.pieces) == list(range(n))


# -- new game -----------------------------------------------------------------


@pytest.mark.parametrize("size", [3, 4, 5])
def test_fresh_game(size: int) -> None:
    game = _game(size)
    _assert_bijection(game)
    assert game.state.moves == 0
    assert game.state.seconds == 0
    assert not game.state.running
    assert game.state.armed is None
    assert game.phase is Phase.IDLE


@pytest.mark.parametrize("size", [2, 6, 0])
def test_unsupported_size_rejected(size: int) -> None:
    with pytest.raises(InvalidBoardError):
        _game(size)


def test_new_game_resets_everything(ticker: ManualTicker) -> None:
    game = _game(ticker=ticker)
    game.swap(0, 1)
    ticker.fire(3)
    game.state.armed = 4
    assert ticker.active

    game.new_game()

    assert game.state.moves == 0
    assert game.state.seconds == 0
    assert not game.state.running
    assert game.state.armed is None
    assert not ticker.active
    assert game.phase is Phase.IDLE


def test_set_size_regenerates(ticker: ManualTicker) -> None:
    game = _game(ticker=ticker)
    game.swap(0, 1)
    game.set_size(5)
    assert game.size == 5
    assert len(game.state.board.pieces) == 25
    assert game.state.moves == 0
    assert not ticker.active


def test_use_image_trims_and_restarts() -> None:
    game = _game()
    game.swap(0, 1)
    assert game.use_image("  https://example.com/a.png  ") == "https://example.com/a.png"
    assert game.image == "https://example.com/a.png"
    assert game.state.moves == 0


def test_blank_image_reverts_to_default() -> None:
    game = GamePlay(3, "https://example.com/a.png", rng=random.Random(1))
    game.use_image("   ")
    assert game.image == DEFAULT_IMAGE


# -- swaps --------------------------------------------------------------------


def test_swap_same_slot_is_noop() -> None:
    game = _game()
    for slot in range(9):
        before = game.state.board.pieces[:]
        assert not game.swap(slot, slot)
        assert game.state.board.pieces == before
    assert game.state.moves == 0
    assert not game.state.running


def test_swap_counts_and_starts_clock(ticker: ManualTicker) -> None:
    board = Board.from_flat(3, [8, 7, 6, 5, 4, 3, 2, 1, 0])
    game = GamePlay.from_board(board, ticker=ticker)
    a, b = game.state.board.pieces[0], game.state.board.pieces[4]

    assert game.swap(0, 4)

    assert game.state.board.pieces[0] == b
    assert game.state.board.pieces[4] == a
    assert game.state.moves == 1
    assert game.state.running
    assert ticker.active
    assert game.phase is Phase.RUNNING


def test_swaps_preserve_bijection() -> None:
    game = _game(5, seed=3)
    moves = random.Random(11)
    applied = 0
    for _ in range(200):
        if game.is_won:
            break
        a, b = moves.randrange(25), moves.randrange(25)
        applied += game.swap(a, b)
        _assert_bijection(game)
    assert game.state.moves == applied


def test_any_two_slots_may_swap() -> None:
    game = _game(4, seed=2)
    before = game.state.board.pieces[:]
    assert game.swap(0, 15)
    assert game.state.board.pieces[0] == before[15]


def test_swap_out_of_range_raises() -> None:
    game = _game()
    with pytest.raises(IndexError):
        game.swap(0, 9)
    assert game.state.moves == 0


def test_scenario_single_swap_solves(near_solved: GamePlay, ticker: ManualTicker) -> None:
    assert near_solved.phase is Phase.IDLE

    assert near_solved.swap(0, 1)

    assert near_solved.state.board.pieces == list(range(9))
    assert near_solved.is_won
    assert near_solved.state.moves == 1
    assert not near_solved.state.running
    assert not ticker.active
    assert near_solved.phase is Phase.SOLVED


def test_solved_is_terminal(near_solved: GamePlay) -> None:
    near_solved.swap(0, 1)
    assert not near_solved.swap(2, 3)
    assert near_solved.state.moves == 1
    assert near_solved.phase is Phase.SOLVED

    near_solved.new_game()
    assert near_solved.phase is Phase.IDLE


# -- clock --------------------------------------------------------------------


def test_clock_idle_until_first_swap(ticker: ManualTicker) -> None:
    game = _game(ticker=ticker)
    assert ticker.fire(5) == 0
    assert not game.tick()
    assert game.state.seconds == 0


def test_clock_counts_while_running(ticker: ManualTicker) -> None:
    board = Board.from_flat(3, [2, 1, 0, 3, 4, 5, 6, 8, 7])
    game = GamePlay.from_board(board, ticker=ticker)
    game.swap(0, 2)
    assert game.phase is Phase.RUNNING
    assert ticker.fire(4) == 4
    assert game.state.seconds == 4


def test_clock_frozen_after_solve(ticker: ManualTicker) -> None:
    board = Board.from_flat(3, [2, 1, 0, 3, 4, 5, 6, 8, 7])
    game = GamePlay.from_board(board, ticker=ticker)
    game.swap(0, 2)
    ticker.fire(3)
    game.swap(7, 8)

    assert game.is_won
    assert game.state.seconds == 3
    assert ticker.fire(10) == 0
    assert not game.tick()
    assert game.state.seconds == 3


def test_clock_does_not_restart_on_its_own(ticker: ManualTicker) -> None:
    board = Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
    game = GamePlay.from_board(board, ticker=ticker)
    game.swap(0, 1)
    game.swap(3, 4)  # rejected: solved
    assert not ticker.active


def test_close_cancels_clock(ticker: ManualTicker) -> None:
    game = _game(ticker=ticker)
    game.swap(0, 1)
    game.close()
    assert not ticker.active
    assert ticker.fire() == 0
