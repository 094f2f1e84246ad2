"""Pygame GUI frontend.

Drag a tile onto another to swap them, or click two tiles in turn.  The
controls row holds the grid size, New Game, and Preview; the image
reference field sits under it.
"""

from __future__ import annotations

import io
import logging
import random
import threading

import pygame

from backend.engine.gameinput import DragHandler, TapHandler
from backend.engine.gameplay import GamePlay
from backend.engine.gametimer.timer import TickCallback
from backend.engine.gameview import BoardView, TileView, build_view, slot_at
from backend.models.picture import load_image_bytes
from backend.settings import BOARD_PX, GRID_SIZES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
MARGIN = 30
WIN_W = BOARD_PX + 2 * MARGIN
WIN_H = 620
BOARD_X, BOARD_Y = MARGIN, 190
DRAG_THRESHOLD = 5  # px of motion before a press becomes a drag

TICK_EVENT = pygame.USEREVENT + 1
PICTURE_EVENT = pygame.USEREVENT + 2


# ---------------------------------------------------------------------------
# Clock ticker on a pygame timer event
# ---------------------------------------------------------------------------
class _PygameTicker:
    def __init__(self) -> None:
        self._callback: TickCallback | None = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        pygame.time.set_timer(TICK_EVENT, 1000)

    def stop(self) -> None:
        self._callback = None
        pygame.time.set_timer(TICK_EVENT, 0)

    def deliver(self) -> None:
        if self._callback is not None:
            self._callback()


# ---------------------------------------------------------------------------
# Background picture fetch
# ---------------------------------------------------------------------------
def _fetch_picture(ref: str) -> None:
    """Read the bytes behind *ref* and post them back as a PICTURE_EVENT."""
    data = load_image_bytes(ref)
    if not pygame.display.get_init():
        return  # window already closed
    pygame.event.post(pygame.event.Event(PICTURE_EVENT, ref=ref, data=data))


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(lbl, lbl.get_rect(center=self.rect.center))

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Image reference field
# ---------------------------------------------------------------------------
class _TextField:
    def __init__(self, rect: tuple[int, int, int, int], font: pygame.font.Font, text: str) -> None:
        self.rect = pygame.Rect(rect)
        self.font = font
        self.text = text
        self.focused = False

    def key(self, ev: pygame.event.Event) -> bool:
        """Edit the text; returns True when Enter commits it."""
        if ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.focused = False
            return True
        if ev.key == pygame.K_ESCAPE:
            self.focused = False
        elif ev.key == pygame.K_BACKSPACE:
            self.text = self.text[:-1]
        elif ev.unicode and ev.unicode.isprintable():
            self.text += ev.unicode
        return False

    def draw(self, surf: pygame.Surface) -> None:
        border = COL_BLUE if self.focused else COL_SURFACE1
        pygame.draw.rect(surf, COL_MANTLE, self.rect, border_radius=6)
        pygame.draw.rect(surf, border, self.rect, width=2, border_radius=6)
        shown = self.text + ("|" if self.focused else "")
        lbl = self.font.render(shown, True, COL_TEXT)
        # Keep the tail of long URLs visible.
        inner_w = self.rect.width - 12
        clip = max(0, lbl.get_width() - inner_w)
        surf.blit(
            lbl,
            (self.rect.x + 6, self.rect.centery - lbl.get_height() // 2),
            area=pygame.Rect(clip, 0, inner_w, lbl.get_height()),
        )


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, size: int, image: str | None, seed: int | None) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Picture Puzzle")
        self._clock = pygame.time.Clock()

        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        self._f_banner = pygame.font.SysFont("Helvetica", 20, bold=True)

        self._ticker = _PygameTicker()
        self._game = GamePlay(
            size,
            image,
            rng=random.Random(seed) if seed is not None else None,
            ticker=self._ticker,
        )
        self._drag = DragHandler(self._game)
        self._taps = TapHandler(self._game)
        self._preview = False

        self._picture: pygame.Surface | None = None
        self._picture_ref: str | None = None

        # Pointer gesture in progress
        self._press_slot: int | None = None
        self._press_pos: tuple[int, int] = (0, 0)
        self._payload: str | None = None
        self._dragging = False

        self._build_controls()
        self._load_picture()

    # ── controls ────────────────────────────────────────────────────────────

    def _build_controls(self) -> None:
        y = 56
        bw, gap = 52, 8
        self._size_btns: dict[int, _Btn] = {}
        for i, s in enumerate(GRID_SIZES):
            self._size_btns[s] = _Btn(
                (MARGIN + i * (bw + gap), y, bw, 34), f"{s}×{s}", self._f_btn
            )
        x = MARGIN + len(GRID_SIZES) * (bw + gap) + 6
        self._new_btn = _Btn(
            (x, y, 86, 34), "NEW GAME", self._f_btn,
            bg=COL_BLUE, hover=(164, 196, 252), fg=COL_BASE,
        )
        self._preview_btn = _Btn((x + 94, y, WIN_W - MARGIN - x - 94, 34), "PREVIEW", self._f_btn)

        self._field = _TextField((MARGIN, 102, BOARD_PX - 100, 32), self._f_small, self._game.image)
        self._use_btn = _Btn(
            (MARGIN + BOARD_PX - 92, 102, 92, 32), "USE IMAGE", self._f_btn,
            bg=COL_PINK, hover=(245, 210, 235), fg=COL_BASE,
        )

        self._buttons: list[_Btn] = [
            *self._size_btns.values(),
            self._new_btn,
            self._preview_btn,
            self._use_btn,
        ]

    # ── picture ─────────────────────────────────────────────────────────────

    def _load_picture(self) -> None:
        """Start fetching the current image; numbered tiles until it arrives."""
        ref = self._game.image
        if ref == self._picture_ref:
            return
        self._picture_ref = ref
        self._picture = None
        threading.Thread(target=_fetch_picture, args=(ref,), daemon=True).start()

    def _picture_loaded(self, ref: str, data: bytes | None) -> None:
        """Decode and scale fetched bytes unless the image changed meanwhile."""
        if ref != self._picture_ref or data is None:
            return
        try:
            img = pygame.image.load(io.BytesIO(data), ref).convert()
        except pygame.error as exc:
            logger.warning("Could not decode image %s: %s", ref, exc)
            return
        self._picture = pygame.transform.smoothscale(img, (BOARD_PX, BOARD_PX))

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_tile(self, tile: TileView, dest: tuple[int, int]) -> None:
        rect = pygame.Rect(dest[0], dest[1], tile.size, tile.size)
        if self._picture is not None:
            self._surf.blit(
                self._picture, rect.topleft,
                area=pygame.Rect(tile.src_x, tile.src_y, tile.size, tile.size),
            )
        else:
            pygame.draw.rect(self._surf, COL_SURFACE0, rect)
            lbl = self._f_title.render(str(tile.piece + 1), True, COL_TEXT)
            self._surf.blit(lbl, lbl.get_rect(center=rect.center))
        pygame.draw.rect(self._surf, COL_OVERLAY0, rect, width=1)
        if tile.armed:
            pygame.draw.rect(self._surf, COL_GREEN, rect, width=3)

    def _draw_preview(self, view: BoardView) -> None:
        """Overlay the uncut picture (or the solved numbering without one)."""
        if self._picture is not None:
            ghost = self._picture.copy()
        else:
            ghost = pygame.Surface((BOARD_PX, BOARD_PX))
            ghost.fill(COL_SURFACE1)
            for tile in view.tiles:
                lbl = self._f_title.render(str(tile.slot + 1), True, COL_TEXT)
                centre = (tile.x + tile.size // 2, tile.y + tile.size // 2)
                ghost.blit(lbl, lbl.get_rect(center=centre))
        ghost.set_alpha(int(255 * view.preview_opacity))
        self._surf.blit(ghost, (BOARD_X, BOARD_Y))

    def _draw_board(self, view: BoardView) -> None:
        pygame.draw.rect(
            self._surf, COL_MANTLE,
            pygame.Rect(BOARD_X - 4, BOARD_Y - 4, BOARD_PX + 8, BOARD_PX + 8),
            border_radius=6,
        )
        dragged = self._drag.source if self._dragging else None
        for tile in view.tiles:
            if tile.slot == dragged:
                continue
            self._draw_tile(tile, (BOARD_X + tile.x, BOARD_Y + tile.y))

        if view.preview:
            self._draw_preview(view)

        if view.banner:
            shade = pygame.Surface((BOARD_PX, BOARD_PX), pygame.SRCALPHA)
            shade.fill((0, 0, 0, 90))
            self._surf.blit(shade, (BOARD_X, BOARD_Y))
            lbl = self._f_banner.render(view.banner, True, (255, 255, 255))
            self._surf.blit(
                lbl, lbl.get_rect(center=(BOARD_X + BOARD_PX // 2, BOARD_Y + BOARD_PX // 2))
            )

        # dragged tile follows the pointer
        if dragged is not None:
            tile = view.tiles[dragged]
            mx, my = pygame.mouse.get_pos()
            self._draw_tile(tile, (mx - tile.size // 2, my - tile.size // 2))

    def _draw(self) -> None:
        view = build_view(self._game, self._preview)
        self._surf.fill(COL_BASE)

        title = self._f_title.render("Picture Puzzle", True, COL_TEXT)
        self._surf.blit(title, (MARGIN, 16))

        for s, btn in self._size_btns.items():
            btn.bg = COL_GREEN if s == view.grid else COL_SURFACE0
            btn.fg = COL_BASE if s == view.grid else COL_TEXT
        self._preview_btn.text = "HIDE" if self._preview else "PREVIEW"
        for btn in self._buttons:
            btn.draw(self._surf)
        self._field.draw(self._surf)

        stats = self._f_body.render(f"⏱ {view.stats}", True, COL_PINK)
        self._surf.blit(stats, (MARGIN, 150))
        if view.solved:
            done = self._f_body.render("Solved!", True, COL_GREEN)
            self._surf.blit(done, (WIN_W - MARGIN - done.get_width(), 150))

        self._draw_board(view)

        hint = self._f_small.render(
            "Drag a tile onto another, or click two tiles, to swap them.",
            True, COL_OVERLAY0,
        )
        self._surf.blit(hint, hint.get_rect(center=(WIN_W // 2, BOARD_Y + BOARD_PX + 24)))
        keys = self._f_small.render(
            "N  new     P  preview     3/4/5  grid     I  image     Esc  quit",
            True, COL_SUBTEXT,
        )
        self._surf.blit(keys, keys.get_rect(center=(WIN_W // 2, BOARD_Y + BOARD_PX + 44)))

    # ── actions ─────────────────────────────────────────────────────────────

    def _new_game(self, size: int | None = None) -> None:
        self._reset_pointer()
        self._game.new_game(size)

    def _use_image(self) -> None:
        self._reset_pointer()
        self._field.text = self._game.use_image(self._field.text)
        self._load_picture()

    def _reset_pointer(self) -> None:
        self._press_slot = None
        self._payload = None
        self._dragging = False
        self._drag.cancel()

    def _board_slot(self, pos: tuple[int, int]) -> int | None:
        view = build_view(self._game, self._preview)
        return slot_at(view, pos[0] - BOARD_X, pos[1] - BOARD_Y)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_press(self, pos: tuple[int, int]) -> None:
        self._field.focused = self._field.rect.collidepoint(pos)
        for s, btn in self._size_btns.items():
            if btn.hit(pos):
                self._new_game(s)
                return
        if self._new_btn.hit(pos):
            self._new_game()
        elif self._preview_btn.hit(pos):
            self._preview = not self._preview
        elif self._use_btn.hit(pos):
            self._use_image()
        else:
            slot = self._board_slot(pos)
            if slot is not None:
                self._press_slot = slot
                self._press_pos = pos
                self._payload = self._drag.begin(slot)

    def _ev_motion(self, pos: tuple[int, int]) -> None:
        for btn in self._buttons:
            btn.motion(pos)
        if self._press_slot is not None and not self._dragging:
            dx = pos[0] - self._press_pos[0]
            dy = pos[1] - self._press_pos[1]
            self._dragging = abs(dx) + abs(dy) > DRAG_THRESHOLD

    def _ev_release(self, pos: tuple[int, int]) -> None:
        if self._press_slot is None:
            return
        dest = self._board_slot(pos)
        if self._dragging:
            if dest is None:
                self._drag.cancel()
            else:
                self._drag.drop(dest, self._payload)
        else:
            self._drag.cancel()
            if dest == self._press_slot:
                self._taps.tap(dest)
        self._press_slot = None
        self._payload = None
        self._dragging = False

    def _ev_key(self, ev: pygame.event.Event) -> bool:
        if self._field.focused:
            if self._field.key(ev):
                self._use_image()
            return True

        sizes = {getattr(pygame, f"K_{s}"): s for s in GRID_SIZES}
        if ev.key == pygame.K_ESCAPE:
            return False
        if ev.key == pygame.K_n:
            self._new_game()
        elif ev.key == pygame.K_p:
            self._preview = not self._preview
        elif ev.key == pygame.K_i:
            self._field.focused = True
        elif ev.key in sizes:
            self._new_game(sizes[ev.key])
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        running = True
        try:
            while running:
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        running = False
                    elif ev.type == TICK_EVENT:
                        self._ticker.deliver()
                    elif ev.type == PICTURE_EVENT:
                        self._picture_loaded(ev.ref, ev.data)
                    elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                        self._ev_press(ev.pos)
                    elif ev.type == pygame.MOUSEMOTION:
                        self._ev_motion(ev.pos)
                    elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
                        self._ev_release(ev.pos)
                    elif ev.type == pygame.KEYDOWN:
                        running = self._ev_key(ev)
                    if not running:
                        break

                self._draw()
                pygame.display.flip()
                self._clock.tick(30)
        finally:
            self._game.close()
            pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(size: int = 3, image: str | None = None, seed: int | None = None) -> None:
    """Launch the Pygame GUI."""
    app = PygameApp(size, image, seed)
    app.run_loop()
