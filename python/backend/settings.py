"""Paths, board constants, and environment-driven defaults."""

from __future__ import annotations

import math
import os
from pathlib import Path

PYTHON_ROOT = Path(__file__).resolve().parent.parent  # python/
PROJECT_ROOT = PYTHON_ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"

# -- board ---------------------------------------------------------------------

GRID_SIZES: tuple[int, ...] = (3, 4, 5)
DEFAULT_SIZE = 3
BOARD_PX = 360  # board side length in px
PREVIEW_OPACITY = 0.85

# -- environment ---------------------------------------------------------------

ENV_IMAGE = "PICTURE_PUZZLE_IMAGE"
ENV_LOG_LEVEL = "PICTURE_PUZZLE_LOG_LEVEL"
ENV_FETCH_TIMEOUT = "PICTURE_PUZZLE_FETCH_TIMEOUT"

DEFAULT_LOG_LEVEL = "WARNING"


def fetch_timeout() -> float:
    """Seconds to wait for a remote image, from the environment (default 10)."""
    raw = os.environ.get(ENV_FETCH_TIMEOUT, "").strip()
    try:
        value = float(raw) if raw else 10.0
    except ValueError:
        return 10.0
    # requests rejects zero and negative timeouts with a bare ValueError.
    if not math.isfinite(value) or value <= 0:
        return 10.0
    return value
