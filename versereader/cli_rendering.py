"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command
diagnostics, verse content, notices, countdown prompts, and catalog rows.
"""

from __future__ import annotations

from typing import NoReturn, Sequence

import typer

from .errors import ReaderError
from .models.datatypes import (
    AutoAdvancePrompt,
    BookmarkEntry,
    ChapterDescriptor,
    Notice,
    PlaybackState,
    Reciter,
    VerseContent,
)


_NOTICE_COLORS = {
    "error": typer.colors.RED,
    "warning": typer.colors.YELLOW,
    "info": typer.colors.GREEN,
}


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ReaderError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def format_time(seconds: float) -> str:
    """Format seconds as `m:ss`."""

    whole = int(max(0.0, seconds))
    return f"{whole // 60}:{whole % 60:02d}"


def echo_verse(content: VerseContent) -> None:
    """Print the verse header, text, translation, and media references."""

    chapter = content.chapter
    typer.secho(
        f"Surah: {chapter.canonical_name} ({chapter.display_name}) "
        f"(Verse {content.position.verse_number}/{chapter.verse_count})",
        bold=True,
    )
    typer.echo(content.text)
    typer.echo(content.translation)
    typer.echo(f"Image: {content.image_ref}")
    typer.echo(f"Audio: {content.audio_ref or 'none'}")


def echo_notice(notice: Notice) -> None:
    typer.secho(
        f"{notice.title}: {notice.message}",
        fg=_NOTICE_COLORS.get(notice.level),
        err=notice.level == "error",
    )


def echo_prompt(prompt: AutoAdvancePrompt) -> None:
    """Print the auto-advance countdown line while it is active."""

    if not prompt.active:
        return
    typer.echo(
        "Next verse? (Automatically proceeding in "
        f"{prompt.seconds_remaining} seconds) [y]es / [c]ancel"
    )


def echo_playback(state: PlaybackState) -> None:
    status = "playing" if state.is_playing else "paused"
    loop = " loop" if state.is_looping else ""
    typer.echo(
        f"[{status}{loop}] {format_time(state.elapsed_seconds)} / "
        f"{format_time(state.total_seconds)}"
    )


def echo_chapter_list(chapters: Sequence[ChapterDescriptor]) -> None:
    """Print compact deterministic chapter rows."""

    for chapter in chapters:
        typer.echo(
            f"{chapter.ordinal}) {chapter.canonical_name} ({chapter.verse_count}) - "
            f"{chapter.display_name}"
        )


def echo_reciter_list(reciters: Sequence[Reciter]) -> None:
    for reciter in reciters:
        typer.echo(f"{reciter.id}. {reciter.name}")


def echo_bookmark_list(entries: Sequence[BookmarkEntry]) -> None:
    if not entries:
        typer.echo("No bookmarks yet.")
        return
    for entry in entries:
        typer.echo(f"[{entry.id}] {entry.chapter_name} {entry.verse_number}: {entry.snippet_text}")
