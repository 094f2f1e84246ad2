"""Image reference resolution and loading."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from backend.settings import ASSETS_DIR, fetch_timeout

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = str(ASSETS_DIR / "images" / "default.ppm")


def resolve_image_ref(raw: str | None) -> str:
    """Trim *raw*; a blank reference falls back to the bundled image."""
    ref = (raw or "").strip()
    return ref or DEFAULT_IMAGE


def is_remote(ref: str) -> bool:
    return ref.lower().startswith(("http://", "https://"))


def load_image_bytes(ref: str, timeout: float | None = None) -> bytes | None:
    """Return the raw bytes behind *ref*, or ``None`` if they can't be read.

    *ref* is either an ``http(s)`` URL or a local path.  Failures are only
    logged; callers keep whatever they were showing before.
    """
    if is_remote(ref):
        try:
            resp = requests.get(
                ref, timeout=fetch_timeout() if timeout is None else timeout
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Could not fetch image %s: %s", ref, exc)
            return None
        return resp.content

    path = Path(ref).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        logger.warning("Could not read image %s: %s", path, exc)
        return None
