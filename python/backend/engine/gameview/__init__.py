from backend.engine.gameview.view import (
    TILE_TITLE,
    BoardView,
    TileView,
    build_view,
    format_clock,
    slot_at,
)

__all__ = [
    "TILE_TITLE",
    "BoardView",
    "TileView",
    "build_view",
    "format_clock",
    "slot_at",
]
