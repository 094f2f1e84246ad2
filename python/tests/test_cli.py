"""Command-line tests — option parsing and frontend dispatch."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

import main
from backend.models.picture import DEFAULT_IMAGE
from frontend.cli.input_handler import resolve

runner = CliRunner()


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> list[tuple]:
    calls: list[tuple] = []
    monkeypatch.setattr(main, "setup_logging", lambda level: calls.append(("log", level)))
    monkeypatch.setattr(
        main, "_launch", lambda *args: calls.append(("launch", *args))
    )
    return calls


def test_defaults(launched: list[tuple]) -> None:
    result = runner.invoke(main.app, ["-f", "rich"])
    assert result.exit_code == 0, result.output
    assert launched == [
        ("log", "WARNING"),
        ("launch", main.Frontend.rich, 3, DEFAULT_IMAGE, None),
    ]


def test_all_options(launched: list[tuple]) -> None:
    result = runner.invoke(
        main.app,
        ["-f", "pyqt", "-s", "5", "-i", "https://x.test/p.jpg",
         "--seed", "7", "--log-level", "debug"],
    )
    assert result.exit_code == 0, result.output
    assert launched == [
        ("log", "DEBUG"),
        ("launch", main.Frontend.pyqt, 5, "https://x.test/p.jpg", 7),
    ]


def test_image_from_environment(launched: list[tuple]) -> None:
    result = runner.invoke(
        main.app, ["-f", "pygame"], env={"PICTURE_PUZZLE_IMAGE": "art.png"}
    )
    assert result.exit_code == 0, result.output
    assert launched[-1] == ("launch", main.Frontend.pygame, 3, "art.png", None)


@pytest.mark.parametrize(
    "args",
    [["-s", "6"], ["-s", "2"], ["--log-level", "loud"], ["-f", "vanilla"]],
    ids=["size-6", "size-2", "bad-level", "bad-frontend"],
)
def test_rejects_bad_options(launched: list[tuple], args: list[str]) -> None:
    result = runner.invoke(main.app, ["-f", "rich", *args])
    assert result.exit_code == 2
    assert not any(c[0] == "launch" for c in launched)


# -- key mapping --------------------------------------------------------------


@pytest.mark.parametrize(
    "ch, action",
    [("w", "up"), ("D", "right"), (" ", "tap"), ("\r", "tap"), ("N", "new"),
     ("p", "preview"), ("g", "grid"), ("i", "image"), ("\x03", "quit"),
     ("4", "4"), ("\x07", "")],
)
def test_resolve_key(ch: str, action: str) -> None:
    assert resolve(ch) == action
