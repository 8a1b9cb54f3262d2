"""Unit tests for generation-tagged content resolution."""

from __future__ import annotations

import threading
import time

from tests.fakes import StubFetcher
from versereader.catalog.registry import PositionRegistry
from versereader.content.resolver import (
    InlineResolver,
    ResolutionOutcome,
    ResolutionRequest,
    ThreadedResolver,
)
from versereader.errors import ContentResolutionError, PlaybackError


def _request(generation: int, verse: int = 1) -> ResolutionRequest:
    chapter = PositionRegistry().by_name("Al-Fatihah")
    return ResolutionRequest(
        generation=generation,
        chapter=chapter,
        verse_number=verse,
        language="en",
        reciter_id=1,
    )


def test_inline_resolver_delivers_during_submit() -> None:
    outcomes: list[ResolutionOutcome] = []
    resolver = InlineResolver(StubFetcher())

    resolver.submit(_request(4), outcomes.append)

    assert len(outcomes) == 1
    assert outcomes[0].request.generation == 4
    assert outcomes[0].content is not None
    assert outcomes[0].error is None
    assert resolver.drain() == 0


def test_inline_resolver_wraps_fetch_errors() -> None:
    """Fetch failures should arrive as outcomes rather than exceptions."""

    fetcher = StubFetcher()
    fetcher.errors[(1, 3)] = ContentResolutionError("boom", failure_kind="transport")
    outcomes: list[ResolutionOutcome] = []

    InlineResolver(fetcher).submit(_request(1, verse=3), outcomes.append)

    assert outcomes[0].content is None
    assert isinstance(outcomes[0].error, ContentResolutionError)


def test_threaded_resolver_delivers_only_from_drain() -> None:
    """Outcomes should be handed back on the calling thread by `drain()`."""

    outcomes: list[ResolutionOutcome] = []
    resolver = ThreadedResolver(StubFetcher())
    try:
        resolver.submit(_request(1, verse=1), outcomes.append)
        resolver.submit(_request(2, verse=2), outcomes.append)

        delivered = 0
        deadline = time.monotonic() + 5.0
        while delivered < 2 and time.monotonic() < deadline:
            delivered += resolver.drain()
            time.sleep(0.01)
    finally:
        resolver.close()

    assert sorted(outcome.request.generation for outcome in outcomes) == [1, 2]
    assert all(outcome.content is not None for outcome in outcomes)


def test_inline_resolver_prepares_narration_with_content() -> None:
    outcomes: list[ResolutionOutcome] = []
    resolver = InlineResolver(StubFetcher(), prepare_narration=lambda ref: f"/cache/{ref}")

    resolver.submit(_request(1), outcomes.append)

    assert outcomes[0].narration_ref == "/cache/audio/1/001001.mp3"
    assert outcomes[0].narration_error is None


def test_narration_failure_keeps_resolved_content() -> None:
    """A failed download should not discard the verse text."""

    def _fail(ref: str) -> str:
        raise PlaybackError(f"Narration could not be downloaded: {ref}")

    outcomes: list[ResolutionOutcome] = []
    InlineResolver(StubFetcher(), prepare_narration=_fail).submit(_request(1), outcomes.append)

    assert outcomes[0].content is not None
    assert outcomes[0].error is None
    assert outcomes[0].narration_ref is None
    assert isinstance(outcomes[0].narration_error, PlaybackError)


def test_threaded_resolver_prepares_narration_off_the_calling_thread() -> None:
    """Narration downloads should run on a worker, not on the loop thread."""

    threads: list[str] = []

    def _prepare(ref: str) -> str:
        threads.append(threading.current_thread().name)
        return f"/cache/{ref}"

    outcomes: list[ResolutionOutcome] = []
    resolver = ThreadedResolver(StubFetcher(), prepare_narration=_prepare)
    try:
        resolver.submit(_request(1), outcomes.append)
        deadline = time.monotonic() + 5.0
        while not outcomes and time.monotonic() < deadline:
            resolver.drain()
            time.sleep(0.01)
    finally:
        resolver.close()

    assert outcomes[0].narration_ref == "/cache/audio/1/001001.mp3"
    assert len(threads) == 1
    assert threads[0].startswith("versereader-content")
    assert threads[0] != threading.current_thread().name
