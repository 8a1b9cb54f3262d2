"""Unit tests for CLI rendering helpers."""

from __future__ import annotations

import pytest
import typer

from versereader.cli_rendering import (
    echo_bookmark_list,
    echo_prompt,
    exit_with_command_error,
    format_time,
)
from versereader.errors import InvalidInputError
from versereader.models.datatypes import AutoAdvancePrompt, BookmarkEntry


def test_exit_with_command_error_renders_stage_and_hint(capsys) -> None:
    """Reader errors should print stage, detail, and hint before exiting."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error(
            "link", InvalidInputError("Please enter a valid verse number", hint="Try 1-7.")
        )

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "link failed at stage `input`: Please enter a valid verse number" in captured.err
    assert "Hint: Try 1-7." in captured.err


def test_exit_with_command_error_renders_generic_errors(capsys) -> None:
    with pytest.raises(typer.Exit):
        exit_with_command_error("show", RuntimeError("boom"))

    assert "show failed: boom" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0.0, "0:00"), (9.9, "0:09"), (61.0, "1:01"), (-3.0, "0:00"), (600.0, "10:00")],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected


def test_echo_prompt_only_prints_active_countdown(capsys) -> None:
    echo_prompt(AutoAdvancePrompt())
    echo_prompt(AutoAdvancePrompt(active=True, seconds_remaining=4))

    assert capsys.readouterr().out == (
        "Next verse? (Automatically proceeding in 4 seconds) [y]es / [c]ancel\n"
    )


def test_echo_bookmark_list(capsys) -> None:
    echo_bookmark_list([])
    echo_bookmark_list([BookmarkEntry(id=7, chapter_name="Maryam", verse_number=2, snippet_text="x")])

    assert capsys.readouterr().out == "No bookmarks yet.\n[7] Maryam 2: x\n"
