"""Presentation mapping — a pure function from game state to tile geometry.

Frontends draw a :class:`BoardView`; none of them look at the permutation
directly.  Each tile shows the image region of the piece it holds, so the
crop offset comes from the piece's home row/column, not from its slot.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gameplay import GamePlay
from backend.settings import BOARD_PX, PREVIEW_OPACITY

TILE_TITLE = "Drag, or tap two tiles to swap"


@dataclass(frozen=True)
class TileView:
    slot: int
    piece: int
    row: int
    col: int
    home_row: int
    home_col: int
    x: int
    y: int
    src_x: int
    src_y: int
    size: int
    armed: bool
    correct: bool


@dataclass(frozen=True)
class BoardView:
    grid: int
    board_px: int
    tile_px: int
    image: str
    tiles: tuple[TileView, ...]
    preview: bool
    preview_opacity: float
    solved: bool
    stats: str
    banner: str | None


def format_clock(seconds: int) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def tile_px_for(size: int, board_px: int = BOARD_PX) -> int:
    return board_px // size


def build_view(
    game: GamePlay, preview: bool = False, board_px: int = BOARD_PX
) -> BoardView:
    state = game.state
    board = state.board
    size = board.size
    tpx = tile_px_for(size, board_px)

    tiles: list[TileView] = []
    for slot, piece in enumerate(board.pieces):
        row, col = divmod(slot, size)
        home_row, home_col = board.home_of(piece)
        tiles.append(
            TileView(
                slot=slot,
                piece=piece,
                row=row,
                col=col,
                home_row=home_row,
                home_col=home_col,
                x=col * tpx,
                y=row * tpx,
                src_x=home_col * tpx,
                src_y=home_row * tpx,
                size=tpx,
                armed=state.armed == slot,
                correct=piece == slot,
            )
        )

    solved = board.is_solved()
    clock = format_clock(state.seconds)
    banner = None
    if solved and not preview:
        banner = f"Solved in {clock} • moves: {state.moves}"

    return BoardView(
        grid=size,
        board_px=board_px,
        tile_px=tpx,
        image=game.image,
        tiles=tuple(tiles),
        preview=preview,
        preview_opacity=PREVIEW_OPACITY,
        solved=solved,
        stats=f"{clock} • moves: {state.moves}",
        banner=banner,
    )


def slot_at(view: BoardView, x: int, y: int) -> int | None:
    """Slot under board-relative point (*x*, *y*), or ``None`` outside."""
    if x < 0 or y < 0:
        return None
    col, row = x // view.tile_px, y // view.tile_px
    if row >= view.grid or col >= view.grid:
        return None
    return row * view.grid + col
