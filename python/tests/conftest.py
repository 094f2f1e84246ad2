"""Shared fixtures for the picture puzzle tests."""

from __future__ import annotations

import pytest

from backend.engine.gameplay import GamePlay
from backend.engine.gametimer import ManualTicker
from backend.models.board import Board


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def near_solved(ticker: ManualTicker) -> GamePlay:
    """3×3 game one swap (slots 0 and 1) away from solved."""
    board = Board.from_flat(3, [1, 0, 2, 3, 4, 5, 6, 7, 8])
    return GamePlay.from_board(board, ticker=ticker)
