"""Gesture adapter tests — drag payloads and two-step taps."""

from __future__ import annotations

import pytest

from backend.engine.gameinput import DragHandler, TapHandler, parse_slot
from backend.engine.gameplay import GamePlay
from backend.models.board import Board


# -- helpers ------------------------------------------------------------------


def _board() -> Board:
    return Board.from_flat(3, [8, 7, 6, 5, 4, 3, 2, 1, 0])


def _game() -> GamePlay:
    return GamePlay.from_board(_board())


# -- payload parsing ----------------------------------------------------------


@pytest.mark.parametrize(
    "payload, expected",
    [("0", 0), ("8", 8), (" 4 ", 4), ("9", None), ("-1", None),
     ("", None), ("abc", None), ("1.5", None), (None, None)],
    ids=["first", "last", "padded", "past-end", "negative",
         "empty", "text", "float", "missing"],
)
def test_parse_slot(payload: str | None, expected: int | None) -> None:
    assert parse_slot(payload, 9) == expected


# -- drag ---------------------------------------------------------------------


def test_drag_swaps_remembered_source() -> None:
    game = _game()
    drag = DragHandler(game)
    assert drag.begin(2) == "2"
    assert drag.drop(5)
    assert game.state.board.pieces[2] == 3
    assert game.state.board.pieces[5] == 6
    assert game.state.moves == 1
    assert drag.source is None


def test_drag_falls_back_to_payload() -> None:
    game = _game()
    drag = DragHandler(game)
    assert drag.drop(5, "2")
    assert game.state.board.pieces[5] == 6


def test_remembered_source_wins_over_payload() -> None:
    game = _game()
    drag = DragHandler(game)
    drag.begin(0)
    assert drag.drop(1, "7")
    assert game.state.board.pieces[:2] == [7, 8]


@pytest.mark.parametrize("payload", [None, "", "x", "99"])
def test_malformed_payload_ignored(payload: str | None) -> None:
    game = _game()
    drag = DragHandler(game)
    assert not drag.drop(3, payload)
    assert game.state.board.pieces == _board().pieces
    assert game.state.moves == 0


def test_drop_on_source_ignored() -> None:
    game = _game()
    drag = DragHandler(game)
    drag.begin(4)
    assert not drag.drop(4)
    assert game.state.moves == 0
    assert drag.source is None


def test_cancel_forgets_source() -> None:
    game = _game()
    drag = DragHandler(game)
    drag.begin(1)
    drag.cancel()
    assert not drag.drop(2)
    assert game.state.moves == 0


# -- tap ----------------------------------------------------------------------


def test_first_tap_arms() -> None:
    game = _game()
    taps = TapHandler(game)
    assert not taps.tap(2)
    assert taps.armed == 2
    assert game.state.moves == 0


def test_same_slot_twice_disarms() -> None:
    game = _game()
    taps = TapHandler(game)
    taps.tap(2)
    assert not taps.tap(2)
    assert taps.armed is None
    assert game.state.moves == 0
    assert game.state.board.pieces == _board().pieces


def test_second_slot_swaps_and_disarms() -> None:
    game = _game()
    taps = TapHandler(game)
    taps.tap(0)
    assert taps.tap(8)
    assert taps.armed is None
    assert game.state.board.pieces[0] == 0
    assert game.state.board.pieces[8] == 8
    assert game.state.moves == 1
    assert game.state.running


def test_tap_on_solved_board_ignored(near_solved: GamePlay) -> None:
    taps = TapHandler(near_solved)
    near_solved.swap(0, 1)

    assert not taps.tap(4)
    assert taps.armed is None
    assert near_solved.state.moves == 1

    near_solved.new_game()
    taps.tap(4)
    assert taps.armed == 4


def test_new_game_clears_armed_tap() -> None:
    game = GamePlay(3)
    taps = TapHandler(game)
    taps.tap(3)
    game.new_game()
    assert taps.armed is None


def test_paths_mix_between_moves() -> None:
    game = _game()
    taps = TapHandler(game)
    drag = DragHandler(game)

    taps.tap(0)
    taps.tap(8)
    drag.begin(1)
    drag.drop(7)

    assert game.state.moves == 2
    assert game.state.board.pieces[:2] == [0, 1]
