"""Gesture adapters: turn drags and taps into ``GamePlay.swap`` calls."""

from __future__ import annotations

import logging

from backend.engine.gameplay import GamePlay

logger = logging.getLogger(__name__)


def parse_slot(payload: str | None, cell_count: int) -> int | None:
    """Parse a serialized slot index; ``None`` if malformed or out of range."""
    if payload is None:
        return None
    try:
        slot = int(payload.strip())
    except ValueError:
        return None
    if not 0 <= slot < cell_count:
        return None
    return slot


class DragHandler:
    """Drag-and-drop path.

    The source slot is remembered at drag start; the serialized copy
    returned by :meth:`begin` travels with the drag data so a drop that
    arrives without the remembered slot can still be resolved.
    """

    def __init__(self, game: GamePlay) -> None:
        self.game = game
        self.source: int | None = None

    def begin(self, slot: int) -> str:
        self.source = slot
        return str(slot)

    def drop(self, dest: int, payload: str | None = None) -> bool:
        source = self.source
        if source is None:
            source = parse_slot(payload, self.game.cell_count)
        self.source = None

        if source is None or source == dest:
            logger.debug("Drop on %d ignored (source=%r)", dest, payload)
            return False
        return self.game.swap(source, dest)

    def cancel(self) -> None:
        self.source = None


class TapHandler:
    """Two-step tap path for devices without drag support."""

    def __init__(self, game: GamePlay) -> None:
        self.game = game

    @property
    def armed(self) -> int | None:
        return self.game.state.armed

    def tap(self, slot: int) -> bool:
        """Arm, disarm, or complete a swap.  Returns True if a swap happened.

        Taps on a solved board are ignored until the next game.
        """
        state = self.game.state
        if self.game.is_won:
            state.armed = None
            return False
        if state.armed is None:
            state.armed = slot
            return False
        if state.armed == slot:
            state.armed = None
            return False

        first, state.armed = state.armed, None
        return self.game.swap(first, slot)
