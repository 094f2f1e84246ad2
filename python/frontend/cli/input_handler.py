"""Single-keypress reader for the terminal frontend.

Keys are read raw (no Enter) and normalised to action strings.  Reads can
time out so the caller's loop keeps the on-screen clock moving.
Works on macOS / Linux (tty+termios+select) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "n": "new",
    "p": "preview",
    "g": "grid",
    "i": "image",
    "h": "help",
    "?": "help",
    " ": "tap",
    "\r": "tap",
    "\n": "tap",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Letters are case-insensitive; digits and other printable characters
    come back unchanged (e.g. ``"4"`` picks a 4×4 grid).
    """
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    end = None if timeout is None else time.monotonic() + timeout
    while end is None or time.monotonic() < end:
        if msvcrt.kbhit():
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                code = msvcrt.getwch()
                return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(code, "")
            if ch == "\x1b":
                return "quit"
            return resolve(ch)
        time.sleep(0.02)
    return None


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def _next(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = _next(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return resolve(ch)

        # ESC [ A/B/C/D, or a bare Escape
        if _next(0.1) != "[":
            return "quit"
        return _ARROW_MAP.get(_next(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def get_key(timeout: float | None = None) -> str | None:
    """Read one keypress and return a normalised action string.

    Returns ``None`` if *timeout* seconds pass without a key; blocks
    forever when *timeout* is ``None``.

    Possible return values:
        "up", "down", "left", "right"  — cursor movement
        "tap"                          — Space / Enter
        "new", "preview", "grid", "image", "help"
        "quit"                         — q / Ctrl-C / Escape
        any other printable character as-is
    """
    if os.name == "nt":
        return _read_windows(timeout)
    return _read_unix(timeout)
