"""Rich terminal frontend — the board as a coloured table.

The terminal has no drag gesture, so swaps go through the tap path: move
the cursor, press Space/Enter on one tile, then on another.  Each tile shows
the home coordinates of the piece it holds (row·column, 1-based).
"""

from __future__ import annotations

import random
import sys

import rich.box
from rich.align import Align
from rich.cells import cell_len
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameinput import TapHandler
from backend.engine.gameplay import GamePlay
from backend.engine.gametimer import ClockTicker
from backend.engine.gameview import BoardView, build_view
from backend.settings import GRID_SIZES
from frontend.cli.input_handler import get_key

console = Console()

_MOVES: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


# -- board rendering ----------------------------------------------------------


def _label(home_row: int, home_col: int) -> str:
    return f"{home_row + 1}·{home_col + 1}"


def _render_board(view: BoardView, cursor: int) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="green" if view.solved else "bright_blue",
        padding=(0, 1),
    )
    for _ in range(view.grid):
        table.add_column(width=3, justify="center")

    for r in range(view.grid):
        cells: list[Text] = []
        for tile in view.tiles[r * view.grid : (r + 1) * view.grid]:
            if view.preview:
                # Uncut picture: every slot shows its own region.
                cells.append(Text(_label(tile.row, tile.col), style="dim"))
                continue
            style = "bold green" if tile.correct else "bold white"
            if tile.armed:
                style = "bold black on yellow"
            if tile.slot == cursor:
                style += " reverse"
            cells.append(Text(_label(tile.home_row, tile.home_col), style=style))
        table.add_row(*cells)

    return table


def _stats_line(view: BoardView) -> Text:
    stats = Text()
    stats.append("  ⏱ ", style="dim")
    stats.append(view.stats, style="bold yellow")
    return stats


def _draw(view: BoardView, cursor: int, status: str = "") -> None:
    console.clear()

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  pick/swap   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  preview   ", style="dim")
    controls.append("G", style="bold cyan")
    controls.append("  grid   ", style="dim")
    controls.append("I", style="bold cyan")
    controls.append("  image   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    title = f"Picture Puzzle  {view.grid}×{view.grid}"
    panel = Panel(
        Align.center(_render_board(view, cursor)),
        title=f"[bold cyan]{title}[/bold cyan]",
        subtitle=f"[dim]{escape(view.image)}[/dim]",
        border_style="bold green" if view.solved else "bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save the cursor position right before the stats line so
    # _update_time() can overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats_line(view)))
    if view.banner:
        console.print(Align.center(Text(f"\U0001f389 {view.banner}", style="bold green")))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _update_time(view: BoardView) -> None:
    """Overwrite just the stats line using the saved cursor position."""
    line = f"⏱ {view.stats}"
    pad = max(0, (console.width - cell_len(line) - 2) // 2)
    sys.stdout.write(f"\033[u\033[K{' ' * pad}  \033[2m⏱\033[0m \033[33;1m{view.stats}\033[0m")
    sys.stdout.flush()


# -- game loop ----------------------------------------------------------------


def _next_size(size: int) -> int:
    i = GRID_SIZES.index(size)
    return GRID_SIZES[(i + 1) % len(GRID_SIZES)]


def _play(game: GamePlay, ticker: ClockTicker) -> None:
    taps = TapHandler(game)
    cursor = 0
    preview = False
    status = ""

    while True:
        view = build_view(game, preview)
        _draw(view, cursor, status)
        status = ""

        # Wait for input, pumping the clock so the timer line keeps moving.
        while True:
            key = get_key(min(0.5, ticker.until_next()))
            if ticker.pump():
                _update_time(build_view(game, preview))
            if key is not None:
                break

        if key in _MOVES:
            dr, dc = _MOVES[key]
            r, c = divmod(cursor, game.size)
            r = (r + dr) % game.size
            c = (c + dc) % game.size
            cursor = r * game.size + c
        elif key == "tap":
            taps.tap(cursor)
        elif key == "new":
            game.new_game()
            status = "[yellow]Shuffled![/yellow]"
        elif key == "preview":
            preview = not preview
        elif key == "grid" or key in {str(s) for s in GRID_SIZES}:
            size = int(key) if key != "grid" else _next_size(game.size)
            game.set_size(size)
            cursor = 0
        elif key == "image":
            console.print()
            raw = console.input("  [bold cyan]Image URL or path[/bold cyan] (blank = default): ")
            status = f"[cyan]Image:[/cyan] {escape(game.use_image(raw))}"
        elif key == "help":
            status = (
                "Tiles show where their piece belongs (row·column). "
                "Swap any two tiles until every label matches its place."
            )
        elif key == "quit":
            return


# -- public entry point -------------------------------------------------------


def run(size: int = 3, image: str | None = None, seed: int | None = None) -> None:
    """Launch the Rich terminal frontend."""
    ticker = ClockTicker()
    game = GamePlay(
        size,
        image,
        rng=random.Random(seed) if seed is not None else None,
        ticker=ticker,
    )
    try:
        _play(game, ticker)
    finally:
        game.close()
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
