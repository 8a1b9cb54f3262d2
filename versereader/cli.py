"""Command-line interface for the verse reader.

Responsibilities:
- Expose catalog, lookup, bookmark, and interactive reading commands.
- Convert CLI arguments into `ReaderConfig` and drive a `ReadingSession`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import os
import queue
import sys
import threading
from pathlib import Path
from typing import Annotated

import typer

from .bookmarks.store import BookmarkStore
from .catalog.reciters import RECITERS, TRANSLATION_EDITIONS
from .catalog.registry import PositionRegistry
from .cli_rendering import (
    echo_bookmark_list,
    echo_chapter_list,
    echo_notice,
    echo_playback,
    echo_prompt,
    echo_reciter_list,
    echo_verse,
    exit_with_command_error,
)
from .config import ConfigLoader, ReaderConfig
from .content.fetcher import ContentFetcher
from .content.resolver import ThreadedResolver
from .deeplink import LocationState, format_location
from .errors import InvalidInputError, ReaderError
from .io.storage import SlotStore
from .models.datatypes import ReadingPosition
from .parsing import parse_verse_number
from .playback.pygame_backend import narration_preparer, pygame_resource_factory
from .session import ReadingSession, resolve_start_position
from .telemetry.logger import SessionLogger

app = typer.Typer(
    name="versereader",
    no_args_is_help=True,
    help="Verse-by-verse reader with narration.",
)

_POLL_INTERVAL_SECONDS = 0.1

_READ_HELP = """Commands:
  n            next verse
  p            previous verse
  t            play / pause
  s <seconds>  seek
  l            toggle looping
  b            bookmark this verse
  r            reset to the first verse
  g <surah> [verse]  go to a surah (name or number)
  v <verse>    go to a verse in this surah
  y / c        confirm / cancel auto-advance
  lang <code>  switch translation (en, ur)
  qari <id>    switch narrator
  i            playback status
  link         print the shareable location
  h            this help
  q            quit"""


def _load_config(
    config_path: Path | None,
    *,
    data_dir: Path | None = None,
    language: str | None = None,
    reciter_id: int | None = None,
    looping: bool | None = None,
) -> ReaderConfig:
    """Load YAML or environment config, apply CLI overrides, and validate."""

    try:
        if config_path is None:
            config = ConfigLoader.from_env(os.environ)
        else:
            config = ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise ReaderError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ReaderError(
            stage="config",
            detail=f"Invalid configuration: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc

    if data_dir is not None:
        config.data_dir = data_dir
    if language is not None:
        config.language = language
    if reciter_id is not None:
        config.reciter_id = reciter_id
    if looping is not None:
        config.looping = looping
    try:
        config.validate()
    except ValueError as exc:
        raise ReaderError(stage="config", detail=str(exc)) from exc
    return config


def _resolve_position(registry: PositionRegistry, surah: str, verse: str) -> ReadingPosition:
    """Turn command arguments into a validated reading position."""

    chapter = registry.find(surah)
    if chapter is None:
        raise InvalidInputError(
            f"Unknown surah `{surah}`.",
            hint="Run `versereader chapters` to list names and numbers.",
        )
    verse_number = parse_verse_number(verse)
    if verse_number is None or not 1 <= verse_number <= chapter.verse_count:
        raise InvalidInputError(
            "Please enter a valid verse number",
            hint=f"{chapter.canonical_name} has verses 1 to {chapter.verse_count}.",
        )
    return ReadingPosition(chapter.canonical_name, verse_number)


def _split_go_arguments(argument: str) -> tuple[str, str | None]:
    """Split `<surah name or number> [verse]`, allowing spaces in names."""

    head, _, tail = argument.rstrip().rpartition(" ")
    if head and parse_verse_number(tail) is not None:
        return head.strip(), tail
    return argument.strip(), None


def dispatch_command(session: ReadingSession, line: str) -> bool:
    """Apply one interactive command line; returns `False` to quit."""

    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in {"q", "quit", "exit"}:
        return False
    if command == "n":
        if not session.next_verse():
            typer.echo("Already at the last verse.")
    elif command == "p":
        if not session.previous_verse():
            typer.echo("Already at the first verse.")
    elif command == "t":
        session.toggle_playback()
        echo_playback(session.playback_state)
    elif command == "s":
        try:
            session.seek(float(argument))
        except ValueError:
            typer.echo("Usage: s <seconds>")
    elif command == "l":
        session.set_looping(not session.looping)
        typer.echo(f"Looping {'on' if session.looping else 'off'}.")
    elif command == "b":
        if session.is_bookmarked():
            typer.echo("Bookmarked.")
        elif session.bookmark_current() is None:
            typer.echo("Nothing to bookmark yet.")
    elif command == "r":
        session.reset()
    elif command == "g" and argument:
        surah, verse = _split_go_arguments(argument)
        chapter = session.locator.registry.find(surah)
        if chapter is None:
            typer.echo(f"Unknown surah `{surah}`.")
        elif verse is None:
            session.select_chapter(chapter.canonical_name)
        else:
            session.go_to(chapter.canonical_name, parse_verse_number(verse))
    elif command == "v" and argument:
        session.enter_verse(argument)
    elif command == "y":
        session.confirm_auto_advance()
    elif command == "c":
        session.cancel_auto_advance()
    elif command == "lang" and argument:
        if argument in TRANSLATION_EDITIONS:
            session.set_language(argument)
        else:
            typer.echo(f"Unsupported language `{argument}`.")
    elif command == "qari" and argument.isdecimal():
        session.set_reciter(int(argument))
    elif command == "i":
        echo_playback(session.playback_state)
    elif command == "link":
        typer.echo(format_location(session.position))
    elif command in {"h", "help", "?"}:
        typer.echo(_READ_HELP)
    elif command:
        typer.echo("Unknown command. Type `h` for help.")
    return True


def _start_input_reader(lines: "queue.Queue[str | None]") -> threading.Thread:
    """Read stdin lines on a daemon thread; `None` marks end of input."""

    def _reader() -> None:
        for line in sys.stdin:
            lines.put(line)
        lines.put(None)

    thread = threading.Thread(target=_reader, name="versereader-input", daemon=True)
    thread.start()
    return thread


def run_reader_loop(session: ReadingSession) -> None:
    """Pump the session and apply stdin commands until quit or end of input."""

    lines: queue.Queue[str | None] = queue.Queue()
    _start_input_reader(lines)
    while True:
        session.tick()
        try:
            line = lines.get(timeout=_POLL_INTERVAL_SECONDS)
        except queue.Empty:
            continue
        if line is None or not dispatch_command(session, line):
            return


@app.command("read")
def read_command(
    surah: Annotated[
        str | None,
        typer.Option("--surah", help="Surah name or number to start at."),
    ] = None,
    verse: Annotated[
        str | None,
        typer.Option("--verse", help="Verse number to start at."),
    ] = None,
    link: Annotated[
        str | None,
        typer.Option("--link", help="Shared location, e.g. `?surah=Al-Kahf&verse=10`."),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", help="Translation language (`en` or `ur`)."),
    ] = None,
    reciter: Annotated[
        int | None,
        typer.Option("--reciter", help="Narrator id (see `versereader reciters`)."),
    ] = None,
    loop: Annotated[
        bool | None,
        typer.Option("--loop/--no-loop", help="Repeat narration instead of auto-advancing."),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory for bookmarks, state, and audio cache."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log component events to stderr."),
    ] = False,
) -> None:
    """Read interactively, verse by verse, with narration and auto-advance."""

    try:
        config = _load_config(
            config_file,
            data_dir=data_dir,
            language=language,
            reciter_id=reciter,
            looping=loop,
        )
        logger = SessionLogger(sys.stderr, level="DEBUG" if verbose else "WARNING")
        registry = PositionRegistry()
        initial = resolve_start_position(
            registry,
            location=link,
            chapter_name=surah,
            verse=verse,
            saved=LocationState(SlotStore(config.data_dir)),
        )
        session = ReadingSession.from_config(
            config,
            pygame_resource_factory(config.audio_cache_dir, config.request_timeout_seconds),
            initial=initial,
            resolver=ThreadedResolver(
                ContentFetcher(
                    api_base_url=config.api_base_url,
                    image_base_url=config.image_base_url,
                    audio_base_url=config.audio_base_url,
                    timeout_seconds=config.request_timeout_seconds,
                ),
                prepare_narration=narration_preparer(
                    config.audio_cache_dir, config.request_timeout_seconds
                ),
            ),
            registry=registry,
            logger=logger,
        )
    except Exception as exc:
        exit_with_command_error("read", exc)

    session.notices.subscribe(echo_notice)
    session.content_changes.subscribe(
        lambda content: echo_verse(content) if content is not None else None
    )
    session.countdown.changes.subscribe(echo_prompt)
    typer.echo("Type `h` for help.")
    try:
        session.start()
        run_reader_loop(session)
    except KeyboardInterrupt:
        typer.echo("")
    except Exception as exc:
        exit_with_command_error("read", exc)
    finally:
        session.close()


@app.command("show")
def show_command(
    surah: Annotated[str, typer.Argument(help="Surah name or number.")],
    verse: Annotated[str, typer.Argument(help="Verse number.")],
    language: Annotated[
        str | None,
        typer.Option("--language", help="Translation language (`en` or `ur`)."),
    ] = None,
    reciter: Annotated[
        int | None,
        typer.Option("--reciter", help="Narrator id (see `versereader reciters`)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """Fetch one verse and print its text, translation, and media references."""

    try:
        config = _load_config(config_file, language=language, reciter_id=reciter)
        registry = PositionRegistry()
        position = _resolve_position(registry, surah, verse)
        fetcher = ContentFetcher(
            api_base_url=config.api_base_url,
            image_base_url=config.image_base_url,
            audio_base_url=config.audio_base_url,
            timeout_seconds=config.request_timeout_seconds,
        )
        content = fetcher.fetch(
            registry.resolve(position.chapter_name),
            position.verse_number,
            language=config.language,
            reciter_id=config.reciter_id,
        )
    except Exception as exc:
        exit_with_command_error("show", exc)

    echo_verse(content)


@app.command("chapters")
def chapters_command() -> None:
    """List every surah with its number, verse count, and English name."""

    echo_chapter_list(PositionRegistry().chapters())


@app.command("reciters")
def reciters_command() -> None:
    """List available narrators."""

    echo_reciter_list(RECITERS)


@app.command("bookmarks")
def bookmarks_command(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory holding the bookmark slot."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """List saved bookmarks in the order they were added."""

    try:
        config = _load_config(config_file, data_dir=data_dir)
        store = BookmarkStore(SlotStore(config.data_dir))
    except Exception as exc:
        exit_with_command_error("bookmarks", exc)

    echo_bookmark_list(store.entries())


@app.command("unbookmark")
def unbookmark_command(
    bookmark_id: Annotated[int, typer.Argument(help="Bookmark id from `versereader bookmarks`.")],
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory holding the bookmark slot."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
) -> None:
    """Delete one bookmark by id."""

    try:
        config = _load_config(config_file, data_dir=data_dir)
        store = BookmarkStore(SlotStore(config.data_dir))
        removed = store.remove(bookmark_id)
        if not removed:
            raise ReaderError(
                stage="bookmarks",
                detail=f"No bookmark with id {bookmark_id}.",
                hint="Run `versereader bookmarks` to list ids.",
            )
    except Exception as exc:
        exit_with_command_error("unbookmark", exc)

    typer.echo(f"Removed bookmark {bookmark_id}.")


@app.command("link")
def link_command(
    surah: Annotated[str, typer.Argument(help="Surah name or number.")],
    verse: Annotated[str, typer.Argument(help="Verse number.")],
) -> None:
    """Print the shareable location for a verse."""

    try:
        position = _resolve_position(PositionRegistry(), surah, verse)
    except Exception as exc:
        exit_with_command_error("link", exc)

    typer.echo(format_location(position))


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
