"""PyQt6 GUI frontend.

Tiles are labels showing crops of the source picture.  Dragging carries
the source slot as ``text/plain`` mime data; a click without a drag is a
tap.
"""

from __future__ import annotations

import logging
import random
import sys

from PyQt6.QtCore import (
    QMimeData,
    QObject,
    QPoint,
    QRunnable,
    Qt,
    QThreadPool,
    QTimer,
    pyqtSignal,
)
from PyQt6.QtGui import QCloseEvent, QDrag, QFont, QKeyEvent, QMouseEvent, QPixmap
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameinput import DragHandler, TapHandler
from backend.engine.gameplay import GamePlay
from backend.engine.gametimer.timer import TickCallback
from backend.engine.gameview import TILE_TITLE, BoardView, TileView, build_view
from backend.models.picture import load_image_bytes
from backend.settings import BOARD_PX, GRID_SIZES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_PINK = "#f5c2e7"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
    QComboBox, QLineEdit {{
        background: {_MANTLE}; color: {_TEXT};
        border: 1px solid {_SURFACE1}; border-radius: 6px; padding: 4px 8px;
    }}
"""


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 12,
    min_h: int = 34,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 14px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


# ---------------------------------------------------------------------------
# Clock ticker on a QTimer
# ---------------------------------------------------------------------------
class _QtTicker:
    def __init__(self, parent: QObject | None, on_tick: TickCallback) -> None:
        self._timer = QTimer(parent)
        self._timer.setInterval(1000)
        self._timer.timeout.connect(self._deliver)
        self._on_tick = on_tick
        self._callback: TickCallback | None = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        self._callback = None
        self._timer.stop()

    def _deliver(self) -> None:
        if self._callback is not None:
            self._callback()
            self._on_tick()


# ---------------------------------------------------------------------------
# Background picture fetch
# ---------------------------------------------------------------------------
class _FetchSignals(QObject):
    loaded = pyqtSignal(str, object)  # ref, bytes or None


class _PictureFetch(QRunnable):
    """Reads an image reference on the thread pool; pixmaps stay on the GUI thread."""

    def __init__(self, ref: str) -> None:
        super().__init__()
        self.ref = ref
        self.signals = _FetchSignals()

    def run(self) -> None:
        self.signals.loaded.emit(self.ref, load_image_bytes(self.ref))


# ---------------------------------------------------------------------------
# Tiles
# ---------------------------------------------------------------------------
class _Tile(QLabel):
    """One board slot; emits gestures, knows nothing about the game."""

    tapped = pyqtSignal(int)
    drag_started = pyqtSignal(int)
    dropped = pyqtSignal(int, str)
    drag_finished = pyqtSignal()

    def __init__(self, slot: int, parent: QWidget) -> None:
        super().__init__(parent)
        self.slot = slot
        self.payload = ""
        self._press: QPoint | None = None
        self.setAcceptDrops(True)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setToolTip(TILE_TITLE)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def mousePressEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if ev is not None and ev.button() == Qt.MouseButton.LeftButton:
            self._press = ev.position().toPoint()

    def mouseMoveEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if ev is None or self._press is None:
            return
        moved = (ev.position().toPoint() - self._press).manhattanLength()
        if moved < QApplication.startDragDistance():
            return
        self._press = None

        self.drag_started.emit(self.slot)
        mime = QMimeData()
        mime.setText(self.payload)
        drag = QDrag(self)
        drag.setMimeData(mime)
        pm = self.pixmap()
        if pm is not None and not pm.isNull():
            drag.setPixmap(pm)
            drag.setHotSpot(QPoint(pm.width() // 2, pm.height() // 2))
        drag.exec(Qt.DropAction.MoveAction)
        self.drag_finished.emit()

    def mouseReleaseEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if self._press is not None:
            self._press = None
            self.tapped.emit(self.slot)

    def dragEnterEvent(self, ev) -> None:  # noqa: N802
        if ev.mimeData().hasText():
            ev.acceptProposedAction()

    def dropEvent(self, ev) -> None:  # noqa: N802
        ev.acceptProposedAction()
        self.dropped.emit(self.slot, ev.mimeData().text())


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------
class _MainWindow(QMainWindow):
    def __init__(self, size: int, image: str | None, seed: int | None) -> None:
        super().__init__()
        self.setWindowTitle("Picture Puzzle")
        self.setStyleSheet(_GLOBAL_CSS)

        self._ticker = _QtTicker(self, self._refresh_stats)
        self.game = GamePlay(
            size,
            image,
            rng=random.Random(seed) if seed is not None else None,
            ticker=self._ticker,
        )
        self._drag = DragHandler(self.game)
        self._taps = TapHandler(self.game)
        self._preview = False
        self._picture: QPixmap | None = None
        self._picture_ref: str | None = None
        self._tiles: list[_Tile] = []

        page = QWidget()
        page.setObjectName("page")
        self.setCentralWidget(page)
        root = QVBoxLayout(page)
        root.setSpacing(8)
        root.setContentsMargins(20, 14, 20, 14)

        title = QLabel("Picture Puzzle")
        title.setFont(QFont("Helvetica", 18, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        # controls
        row = QHBoxLayout()
        row.setSpacing(8)
        self._size_box = QComboBox()
        for s in GRID_SIZES:
            self._size_box.addItem(f"{s} × {s}", s)
        self._size_box.setCurrentIndex(GRID_SIZES.index(self.game.size))
        self._size_box.currentIndexChanged.connect(self._on_size)
        row.addWidget(QLabel("Grid:"))
        row.addWidget(self._size_box)
        self._new_btn = _styled_btn("New game", bg=_BLUE, hover=_LAVENDER, fg=_BASE)
        self._new_btn.clicked.connect(self._on_new)
        row.addWidget(self._new_btn)
        self._preview_btn = _styled_btn("Preview")
        self._preview_btn.clicked.connect(self._on_preview)
        row.addWidget(self._preview_btn)
        root.addLayout(row)

        # stats
        self._stats = QLabel()
        self._stats.setFont(QFont("Helvetica", 13))
        self._stats.setStyleSheet(f"color:{_PINK};")
        self._stats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._stats)

        # image reference
        img_row = QHBoxLayout()
        self._url = QLineEdit(self.game.image)
        self._url.setPlaceholderText("Paste an image URL or path (JPG/PNG)")
        self._url.returnPressed.connect(self._on_use_image)
        img_row.addWidget(self._url)
        use_btn = _styled_btn("Use this image", bg=_PINK, hover=_LAVENDER, fg=_BASE)
        use_btn.clicked.connect(self._on_use_image)
        img_row.addWidget(use_btn)
        root.addLayout(img_row)

        # board
        self._board = QFrame()
        self._board.setFixedSize(BOARD_PX, BOARD_PX)
        self._board.setStyleSheet(f"background:{_MANTLE};")
        root.addWidget(self._board, alignment=Qt.AlignmentFlag.AlignCenter)

        self._overlay = QLabel(self._board)
        self._overlay.setGeometry(0, 0, BOARD_PX, BOARD_PX)
        self._overlay.setScaledContents(True)
        self._overlay_fx = QGraphicsOpacityEffect(self._overlay)
        self._overlay.setGraphicsEffect(self._overlay_fx)
        self._overlay.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

        self._banner = QLabel(self._board)
        self._banner.setGeometry(0, 0, BOARD_PX, BOARD_PX)
        self._banner.setWordWrap(True)
        self._banner.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._banner.setFont(QFont("Helvetica", 18, QFont.Weight.Bold))
        self._banner.setStyleSheet("background: rgba(0,0,0,90); color: white;")
        self._banner.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

        hint = QLabel("Drag with the mouse, or click two tiles in turn, to swap them.")
        hint.setFont(QFont("Helvetica", 11))
        hint.setStyleSheet(f"color:{_OVERLAY0};")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(hint)

        self._load_picture()
        self._rebuild_tiles()

    # -- picture ---

    def _load_picture(self) -> None:
        ref = self.game.image
        if ref == self._picture_ref:
            return
        self._picture_ref = ref
        self._picture = None

        fetch = _PictureFetch(ref)
        fetch.signals.loaded.connect(self._picture_loaded)
        QThreadPool.globalInstance().start(fetch)

    def _picture_loaded(self, ref: str, data: bytes | None) -> None:
        if ref != self._picture_ref or data is None:
            return
        pm = QPixmap()
        if not pm.loadFromData(data):
            logger.warning("Could not decode image %s", ref)
            return
        self._picture = pm.scaled(
            BOARD_PX, BOARD_PX,
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._sync()

    # -- board ---

    def _rebuild_tiles(self) -> None:
        for t in self._tiles:
            t.deleteLater()
        self._tiles = []
        for slot in range(self.game.cell_count):
            t = _Tile(slot, self._board)
            t.tapped.connect(self._on_tap)
            t.drag_started.connect(self._on_drag_start)
            t.dropped.connect(self._on_drop)
            t.drag_finished.connect(self._drag.cancel)
            t.show()
            self._tiles.append(t)
        self._sync()

    def _paint_tile(self, t: _Tile, tile: TileView) -> None:
        t.setGeometry(tile.x, tile.y, tile.size, tile.size)
        outline = f"3px solid {_GREEN}" if tile.armed else "1px solid #999"
        if self._picture is not None:
            t.setPixmap(self._picture.copy(tile.src_x, tile.src_y, tile.size, tile.size))
            t.setStyleSheet(f"border:{outline};")
        else:
            t.setText(str(tile.piece + 1))
            t.setFont(QFont("Helvetica", max(12, tile.size // 4), QFont.Weight.Bold))
            t.setStyleSheet(f"background:{_SURFACE0}; color:{_TEXT}; border:{outline};")

    def _sync(self) -> None:
        view = build_view(self.game, self._preview)
        for t, tile in zip(self._tiles, view.tiles):
            self._paint_tile(t, tile)

        self._show_overlay(view)
        if view.banner:
            self._banner.setText(f"\U0001f389 {view.banner}")
            self._banner.show()
            self._banner.raise_()
        else:
            self._banner.hide()
        self._preview_btn.setText("Hide preview" if self._preview else "Preview")
        self._refresh_stats()

    def _show_overlay(self, view: BoardView) -> None:
        if not view.preview:
            self._overlay.hide()
            return
        if self._picture is not None:
            self._overlay.setStyleSheet("border: 2px dashed #333;")
            self._overlay.setPixmap(self._picture)
        else:
            self._overlay.setPixmap(QPixmap())
            self._overlay.setText("\n".join(
                "  ".join(str(r * view.grid + c + 1) for c in range(view.grid))
                for r in range(view.grid)
            ))
            self._overlay.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self._overlay.setStyleSheet(f"background:{_SURFACE1}; font-size:20px;")
        self._overlay_fx.setOpacity(view.preview_opacity)
        self._overlay.show()
        self._overlay.raise_()

    def _refresh_stats(self) -> None:
        view = build_view(self.game, self._preview)
        solved = "   \U0001f389 Solved!" if view.solved else ""
        self._stats.setText(f"⏱ {view.stats}{solved}")

    # -- gestures ---

    def _on_drag_start(self, slot: int) -> None:
        self._tiles[slot].payload = self._drag.begin(slot)

    def _on_drop(self, dest: int, payload: str) -> None:
        if self._drag.drop(dest, payload):
            self._sync()

    def _on_tap(self, slot: int) -> None:
        self._taps.tap(slot)
        self._sync()

    # -- controls ---

    def _on_size(self, index: int) -> None:
        self.game.set_size(self._size_box.itemData(index))
        self._rebuild_tiles()

    def _on_new(self) -> None:
        self.game.new_game()
        self._sync()

    def _on_preview(self) -> None:
        self._preview = not self._preview
        self._sync()

    def _on_use_image(self) -> None:
        self._url.setText(self.game.use_image(self._url.text()))
        self._load_picture()
        self._sync()

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        if key == Qt.Key.Key_N:
            self._on_new()
        elif key == Qt.Key.Key_P:
            self._on_preview()
        elif key == Qt.Key.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, ev: QCloseEvent | None) -> None:  # noqa: N802
        self.game.close()
        super().closeEvent(ev)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(size: int = 3, image: str | None = None, seed: int | None = None) -> None:
    """Launch the PyQt6 GUI."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(size, image, seed)
    window.show()
    qapp.exec()
