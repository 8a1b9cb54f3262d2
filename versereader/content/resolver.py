"""Content resolution dispatch with generation tagging.

Every request carries the session generation it was issued for, so the
session can discard outcomes that arrive after the position moved on.
`ThreadedResolver` performs the HTTP work, including any narration download,
on a worker thread but only hands outcomes back from `drain()`, which the
owning loop calls; all session state therefore changes on one thread.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Protocol

from ..errors import PlaybackError, ReaderError
from ..models.datatypes import ChapterDescriptor, VerseContent
from .fetcher import ContentFetcher


@dataclass(frozen=True, slots=True)
class ResolutionRequest:
    """One content lookup issued for a specific session generation."""

    generation: int
    chapter: ChapterDescriptor
    verse_number: int
    language: str
    reciter_id: int


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    """Result of a lookup: exactly one of `content` or `error` is set.

    Attributes:
        request: The request this outcome answers.
        content: Resolved verse content.
        error: Why resolution failed.
        narration_ref: Local narration file prepared alongside the content.
        narration_error: Why narration could not be prepared; content is still usable.
    """

    request: ResolutionRequest
    content: VerseContent | None = None
    error: ReaderError | None = None
    narration_ref: str | None = None
    narration_error: PlaybackError | None = None


OutcomeCallback = Callable[[ResolutionOutcome], None]
NarrationPreparer = Callable[[str], str]


class ContentResolver(Protocol):
    """Dispatch contract used by the reading session."""

    def submit(self, request: ResolutionRequest, callback: OutcomeCallback) -> None:
        """Start resolving a request and report the outcome through `callback`."""

    def drain(self) -> int:
        """Deliver completed outcomes and return how many were delivered."""

    def close(self) -> None:
        """Release worker resources."""


def _resolve(
    fetcher: ContentFetcher,
    request: ResolutionRequest,
    prepare_narration: NarrationPreparer | None = None,
) -> ResolutionOutcome:
    try:
        content = fetcher.fetch(
            request.chapter,
            request.verse_number,
            language=request.language,
            reciter_id=request.reciter_id,
        )
    except ReaderError as exc:
        return ResolutionOutcome(request=request, error=exc)
    if prepare_narration is None or content.audio_ref is None:
        return ResolutionOutcome(request=request, content=content)
    try:
        narration_ref = prepare_narration(content.audio_ref)
    except PlaybackError as exc:
        return ResolutionOutcome(request=request, content=content, narration_error=exc)
    return ResolutionOutcome(request=request, content=content, narration_ref=narration_ref)


class InlineResolver:
    """Resolve synchronously inside `submit`."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        prepare_narration: NarrationPreparer | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._prepare_narration = prepare_narration

    def submit(self, request: ResolutionRequest, callback: OutcomeCallback) -> None:
        callback(_resolve(self._fetcher, request, self._prepare_narration))

    def drain(self) -> int:
        return 0

    def close(self) -> None:
        return None


class ThreadedResolver:
    """Resolve on a worker thread and deliver outcomes from `drain()`.

    `prepare_narration`, when given, also runs on the worker so narration
    downloads never block the owning loop.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        prepare_narration: NarrationPreparer | None = None,
        max_workers: int = 2,
    ) -> None:
        self._fetcher = fetcher
        self._prepare_narration = prepare_narration
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="versereader-content"
        )
        self._pending: list[tuple[Future[ResolutionOutcome], OutcomeCallback]] = []

    def submit(self, request: ResolutionRequest, callback: OutcomeCallback) -> None:
        future = self._executor.submit(
            _resolve, self._fetcher, request, self._prepare_narration
        )
        self._pending.append((future, callback))

    def drain(self) -> int:
        """Deliver finished outcomes in submission order."""

        delivered = 0
        snapshot, self._pending = self._pending, []
        for future, callback in snapshot:
            if not future.done():
                self._pending.append((future, callback))
                continue
            callback(future.result())
            delivered += 1
        return delivered

    def close(self) -> None:
        for future, _ in self._pending:
            future.cancel()
        self._pending = []
        self._executor.shutdown(wait=False)
