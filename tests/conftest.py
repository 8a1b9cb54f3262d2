"""Shared pytest fixtures for the reader test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes import FakeClock, FakeResourceFactory, StubFetcher
from versereader.catalog.registry import PositionRegistry
from versereader.config import ReaderConfig
from versereader.content.resolver import InlineResolver
from versereader.models.datatypes import ReadingPosition
from versereader.session import ReadingSession


@pytest.fixture
def registry() -> PositionRegistry:
    return PositionRegistry()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def audio_factory() -> FakeResourceFactory:
    return FakeResourceFactory()


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def reader_config(tmp_path: Path) -> ReaderConfig:
    """Provide a config rooted in a temporary data directory."""

    return ReaderConfig(data_dir=tmp_path / "data")


@pytest.fixture
def make_session(reader_config, audio_factory, stub_fetcher, clock, registry):
    """Build sessions wired to fakes; callers may override resolver and start position."""

    created: list[ReadingSession] = []

    def _make(
        chapter_name: str = "Al-Fatihah",
        verse_number: int | None = 1,
        *,
        resolver=None,
        looping: bool = False,
    ) -> ReadingSession:
        reader_config.looping = looping
        session = ReadingSession.from_config(
            reader_config,
            audio_factory,
            initial=ReadingPosition(chapter_name, verse_number),
            resolver=resolver or InlineResolver(stub_fetcher),
            registry=registry,
            clock=clock,
        )
        created.append(session)
        return session

    yield _make
    for session in created:
        session.close()
