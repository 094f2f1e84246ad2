#!/usr/bin/env python3
"""Picture Puzzle.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -s 4       # Rich terminal, 4×4
    python main.py -f pygame -i pic.png
    python main.py -f pyqt --seed 7   # reproducible shuffle
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.picture import DEFAULT_IMAGE  # noqa: E402
from backend.settings import (  # noqa: E402
    DEFAULT_LOG_LEVEL,
    DEFAULT_SIZE,
    ENV_IMAGE,
    ENV_LOG_LEVEL,
    GRID_SIZES,
)

logger = logging.getLogger("picture_puzzle")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def setup_logging(level: str) -> None:
    """Route all logging through Rich; called once per process."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _validate_size(value: int) -> int:
    if value not in GRID_SIZES:
        choices = ", ".join(str(s) for s in GRID_SIZES)
        raise typer.BadParameter(f"Grid size must be one of {choices}.")
    return value


_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _validate_level(value: str) -> str:
    level = value.strip().upper()
    if level not in _LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(_LEVELS)}.")
    return level


def _ask_size(default: int) -> int:
    choices = "/".join(str(s) for s in GRID_SIZES)
    raw = input(f"  Grid size ({choices}, default {default}): ").strip()
    if not raw:
        return default
    try:
        return _validate_size(int(raw))
    except (ValueError, typer.BadParameter):
        print(f"  Invalid size — using {default}.")
        return default


def _launch(frontend: Frontend, size: int, image: str, seed: Optional[int]) -> None:
    logger.debug("Launching %s frontend (%d×%d)", frontend.value, size, size)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(size=size, image=image, seed=seed)


def _menu_loop(size: int, image: str, seed: Optional[int]) -> None:
    options = {"1": Frontend.rich, "2": Frontend.pygame, "3": Frontend.pyqt}
    while True:
        print()
        print("  ====================================")
        print("       P I C T U R E   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  3.  Play  (PyQt GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice in options:
            size = _ask_size(size)
            _launch(options[choice], size, image, seed)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: int = typer.Option(
        DEFAULT_SIZE, "-s", "--size",
        callback=_validate_size,
        help="Grid size (3, 4 or 5).",
    ),
    image: str = typer.Option(
        DEFAULT_IMAGE, "-i", "--image",
        envvar=ENV_IMAGE,
        help="Image URL or path. Blank uses the bundled picture.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the shuffle for a reproducible board.",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL, "--log-level",
        envvar=ENV_LOG_LEVEL,
        callback=_validate_level,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Picture Puzzle."""
    setup_logging(log_level)

    if frontend is None:
        _menu_loop(size, image, seed)
        return

    _launch(frontend, size, image, seed)


if __name__ == "__main__":
    app()
