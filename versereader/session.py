"""Reading session orchestration.

`ReadingSession` is the single state holder shared by every front end. It
wires the components together:

- position changes cancel any countdown and request content for the new
  position, tagged with a generation number;
- resolved content loads its narration into the playback controller, while
  outcomes for superseded generations are dropped;
- a finished, non-looping narration starts the auto-advance countdown, and a
  confirmed countdown advances the position and resumes playback after a
  short delay.

All mutation happens on the thread that calls the public methods and `tick()`.
"""

from __future__ import annotations

from time import monotonic
from typing import Callable

from .bookmarks.store import BookmarkStore
from .catalog.reciters import find_reciter
from .catalog.registry import PositionRegistry
from .config import ReaderConfig
from .content.fetcher import ContentFetcher
from .content.resolver import (
    ContentResolver,
    InlineResolver,
    ResolutionOutcome,
    ResolutionRequest,
)
from .deeplink import LocationState, position_from_location
from .errors import InvalidInputError, PlaybackError
from .events import EventEmitter
from .io.storage import SlotStore
from .models.datatypes import (
    AutoAdvancePrompt,
    BookmarkEntry,
    Notice,
    PlaybackState,
    ReadingPosition,
    VerseContent,
)
from .navigation.locator import PositionChanged, VerseLocator
from .parsing import parse_verse_number
from .playback.controller import PlaybackController
from .playback.resource import AudioResourceFactory
from .scheduling.auto_advance import AutoAdvanceScheduler, CountdownOutcome
from .scheduling.tasks import ScheduledTask, TaskScheduler
from .telemetry.logger import SessionLogger


def resolve_start_position(
    registry: PositionRegistry,
    *,
    location: str | None = None,
    chapter_name: str | None = None,
    verse: str | int | None = None,
    saved: LocationState | None = None,
) -> ReadingPosition:
    """Pick the startup position.

    Precedence is explicit chapter/verse, then a shared location, then the
    saved last position, then the first verse of the first chapter. Chapter
    names and numbers are matched like user input and stored in canonical form;
    anything that does not match becomes the first chapter.
    """

    default_chapter = registry.first().canonical_name
    if chapter_name is not None or verse is not None:
        position = ReadingPosition(
            chapter_name or default_chapter,
            1 if verse is None else parse_verse_number(verse),
        )
    elif location is not None:
        position = position_from_location(location, default_chapter)
    else:
        restored = saved.restore(default_chapter) if saved is not None else None
        position = restored or ReadingPosition(default_chapter, 1)

    chapter = registry.find(position.chapter_name) or registry.first()
    return ReadingPosition(chapter.canonical_name, position.verse_number)


class ReadingSession:
    """Navigation, content, playback, countdown, and bookmarks for one reader."""

    def __init__(
        self,
        *,
        locator: VerseLocator,
        resolver: ContentResolver,
        playback: PlaybackController,
        countdown: AutoAdvanceScheduler,
        tasks: TaskScheduler,
        bookmarks: BookmarkStore,
        location_state: LocationState | None = None,
        language: str = "en",
        reciter_id: int = 1,
        looping: bool = False,
        resume_delay_seconds: float = 1.0,
        logger: SessionLogger | None = None,
    ) -> None:
        self.locator = locator
        self.playback = playback
        self.countdown = countdown
        self.bookmarks = bookmarks
        self._resolver = resolver
        self._tasks = tasks
        self._location_state = location_state
        self._logger = logger or SessionLogger(configure=False)
        self._resume_delay_seconds = resume_delay_seconds

        self.language = language
        self.reciter_id = reciter_id
        self.looping = looping
        self.content: VerseContent | None = None
        self.is_loading = False

        self._generation = 0
        self._auto_advancing = False
        self._play_when_loaded = False
        self._narration_ref: str | None = None
        self._narration_generation = 0
        self._resume_task: ScheduledTask | None = None

        self.notices: EventEmitter[Notice] = EventEmitter()
        self.content_changes: EventEmitter[VerseContent | None] = EventEmitter()

        self._subscriptions: list[Callable[[], None]] = [
            locator.changes.subscribe(self._on_position_changed),
            playback.finished.subscribe(self._on_playback_finished),
            countdown.outcomes.subscribe(self._on_countdown_outcome),
        ]

    @classmethod
    def from_config(
        cls,
        config: ReaderConfig,
        resource_factory: AudioResourceFactory,
        *,
        initial: ReadingPosition | None = None,
        resolver: ContentResolver | None = None,
        registry: PositionRegistry | None = None,
        clock: Callable[[], float] = monotonic,
        logger: SessionLogger | None = None,
    ) -> "ReadingSession":
        """Build a session and its collaborators from configuration."""

        registry = registry or PositionRegistry()
        logger = logger or SessionLogger(configure=False)
        storage = SlotStore(config.data_dir)
        tasks = TaskScheduler(clock=clock)
        if resolver is None:
            resolver = InlineResolver(
                ContentFetcher(
                    api_base_url=config.api_base_url,
                    image_base_url=config.image_base_url,
                    audio_base_url=config.audio_base_url,
                    timeout_seconds=config.request_timeout_seconds,
                )
            )
        location_state = LocationState(storage)
        start = initial or resolve_start_position(registry, saved=location_state)
        return cls(
            locator=VerseLocator(registry, start),
            resolver=resolver,
            playback=PlaybackController(resource_factory, logger=logger),
            countdown=AutoAdvanceScheduler(
                tasks, countdown_seconds=config.countdown_seconds, logger=logger
            ),
            tasks=tasks,
            bookmarks=BookmarkStore(storage, logger=logger),
            location_state=location_state,
            language=config.language,
            reciter_id=config.reciter_id,
            looping=config.looping,
            resume_delay_seconds=config.resume_delay_seconds,
            logger=logger,
        )

    @property
    def position(self) -> ReadingPosition:
        return self.locator.position

    @property
    def playback_state(self) -> PlaybackState:
        return self.playback.state

    @property
    def prompt(self) -> AutoAdvancePrompt:
        return self.countdown.prompt

    def start(self) -> None:
        """Request content for the initial position."""

        self.refresh()

    def tick(self) -> None:
        """Pump pending work: resolutions, audio progress, and due timers."""

        self._resolver.drain()
        self.playback.poll()
        self._tasks.run_due()

    def close(self) -> None:
        """Cancel timers, release audio, and detach from collaborators."""

        self.countdown.cancel()
        self._cancel_resume()
        self._tasks.cancel_all()
        self.playback.unload()
        self._resolver.close()
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions = []

    # Navigation

    def next_verse(self) -> bool:
        return self.locator.advance()

    def previous_verse(self) -> bool:
        return self.locator.retreat()

    def go_to(self, chapter_name: str, verse_number: int | None) -> None:
        self.locator.set_position(chapter_name, verse_number)

    def select_chapter(self, chapter_name: str) -> None:
        """Jump to the first verse of a chapter."""

        self.locator.set_position(chapter_name, 1)

    def enter_verse(self, raw_value: object) -> None:
        """Apply raw verse input; unparseable values are reported on fetch."""

        self.locator.set_position(self.position.chapter_name, parse_verse_number(raw_value))

    def reset(self) -> None:
        self.locator.reset()

    # Selection

    def set_language(self, language: str) -> None:
        if language == self.language:
            return
        self.language = language
        self._interrupt()
        self.refresh()

    def set_reciter(self, reciter_id: int) -> None:
        if reciter_id == self.reciter_id:
            return
        self.reciter_id = reciter_id
        self._interrupt()
        self.refresh()

    def set_looping(self, looping: bool) -> None:
        self.looping = looping
        self.playback.set_looping(looping)

    # Playback

    def toggle_playback(self) -> None:
        self.playback.toggle()

    def seek(self, target_seconds: float) -> None:
        """Seek within the loaded track, clamped to its known duration."""

        total = self.playback.state.total_seconds
        upper = total if total > 0 else max(0.0, target_seconds)
        self.playback.seek(min(max(0.0, target_seconds), upper))

    def confirm_auto_advance(self) -> bool:
        return self.countdown.confirm()

    def cancel_auto_advance(self) -> bool:
        return self.countdown.cancel()

    # Bookmarks

    def bookmark_current(self) -> BookmarkEntry | None:
        """Bookmark the displayed verse; no-op without resolved content."""

        if self.content is None or self.content.position != self.position:
            return None
        entry = self.bookmarks.add(self.position, self.content.text)
        if entry is not None:
            self._notify(
                "info",
                "Bookmark Added",
                f"Surah {entry.chapter_name}, Verse {entry.verse_number} has been bookmarked.",
            )
        return entry

    def is_bookmarked(self) -> bool:
        return self.bookmarks.contains(self.position)

    # Content resolution

    def refresh(self) -> None:
        """Request content for the current position, superseding older requests."""

        self._generation += 1
        position = self.position
        chapter = self.locator.chapter()
        try:
            verse_number = self._validated_verse(position, chapter.verse_count)
        except InvalidInputError as exc:
            self.is_loading = False
            self._logger.warning("content", "invalid_input", position=position.label())
            self._notify("error", "Invalid Input", exc.detail)
            return

        self.is_loading = True
        self._logger.info(
            "content", "request", position=position.label(), generation=self._generation
        )
        self._resolver.submit(
            ResolutionRequest(
                generation=self._generation,
                chapter=chapter,
                verse_number=verse_number,
                language=self.language,
                reciter_id=self.reciter_id,
            ),
            self._on_resolved,
        )

    @staticmethod
    def _validated_verse(position: ReadingPosition, verse_count: int) -> int:
        verse_number = position.verse_number
        if verse_number is None or verse_number < 1 or verse_number > verse_count:
            raise InvalidInputError(
                "Please enter a valid verse number",
                hint=f"Verses run from 1 to {verse_count}.",
            )
        return verse_number

    def _on_resolved(self, outcome: ResolutionOutcome) -> None:
        request = outcome.request
        if request.generation != self._generation:
            self._logger.info(
                "content", "stale_discard", generation=request.generation, current=self._generation
            )
            return

        self.is_loading = False
        if outcome.error is not None:
            self._logger.failure("content", type(outcome.error).__name__, generation=request.generation)
            self.content = None
            self.playback.unload()
            self._narration_ref = None
            self._play_when_loaded = False
            self.content_changes.emit(None)
            self._notify("error", "Error", outcome.error.detail)
            return

        content = outcome.content
        self.content = content
        self._logger.info("content", "resolved", position=content.position.label())
        if self._location_state is not None:
            self._location_state.save(content.position)
        self.content_changes.emit(content)
        self._load_narration(content, outcome)

    def _load_narration(self, content: VerseContent, outcome: ResolutionOutcome) -> None:
        self._narration_ref = None
        if outcome.narration_error is not None:
            self.playback.unload()
            self._play_when_loaded = False
            self._report_playback_error(outcome.narration_error, content.audio_ref)
            return
        if content.audio_ref is None:
            self.playback.unload()
            self._play_when_loaded = False
            if find_reciter(self.reciter_id) is None:
                self._notify("warning", "No Narration", f"Unknown narrator {self.reciter_id}.")
            return
        narration_ref = outcome.narration_ref or content.audio_ref
        try:
            self.playback.load(narration_ref, self.looping)
        except PlaybackError as exc:
            self._play_when_loaded = False
            self._report_playback_error(exc, content.audio_ref)
            return
        self._narration_ref = narration_ref
        self._narration_generation = outcome.request.generation
        if self._play_when_loaded:
            self._play_when_loaded = False
            self.playback.play()

    # Event handlers

    def _on_position_changed(self, change: PositionChanged) -> None:
        self._logger.info(
            "locator",
            change.cause,
            previous=change.previous.label(),
            current=change.current.label(),
        )
        if not self._auto_advancing:
            self._interrupt()
        self.refresh()

    def _on_playback_finished(self, state: PlaybackState) -> None:
        if self.looping:
            return
        if not self._is_current_narration(state):
            self._logger.info("playback", "stale_finish", ref=state.resource_ref)
            return
        self.countdown.start()

    def _is_current_narration(self, state: PlaybackState) -> bool:
        """Return whether a playback state belongs to the latest requested content.

        Narration left over from before a position, language, or narrator
        change does not count, even while its replacement is still loading.
        """

        content = self.content
        return (
            content is not None
            and content.position == self.position
            and self._narration_generation == self._generation
            and state.resource_ref is not None
            and state.resource_ref == self._narration_ref
        )

    def _on_countdown_outcome(self, outcome: CountdownOutcome) -> None:
        if not outcome.advances:
            return
        self._auto_advancing = True
        try:
            moved = self.locator.advance()
        finally:
            self._auto_advancing = False
        if not moved:
            self._logger.info("session", "end_of_catalog", position=self.position.label())
            self._notify("info", "End Reached", "There is no next verse.")
            return
        self._cancel_resume()
        self._resume_task = self._tasks.call_later(
            self._resume_delay_seconds, self._resume_playback
        )

    def _resume_playback(self) -> None:
        self._resume_task = None
        content_is_current = self.content is not None and self.content.position == self.position
        if content_is_current and self.playback.is_loaded:
            self.playback.play()
            return
        self._play_when_loaded = True

    def _interrupt(self) -> None:
        """Drop countdown and pending resume after a user-driven change."""

        self.countdown.cancel()
        self._cancel_resume()
        self._play_when_loaded = False

    def _cancel_resume(self) -> None:
        if self._resume_task is not None:
            self._resume_task.cancel()
            self._resume_task = None

    def _report_playback_error(self, exc: PlaybackError, ref: str | None) -> None:
        self._logger.failure("playback", type(exc).__name__, ref=ref or "none")
        self._notify("error", "Playback Error", exc.detail)

    def _notify(self, level: str, title: str, message: str) -> None:
        self.notices.emit(Notice(level=level, title=title, message=message))
