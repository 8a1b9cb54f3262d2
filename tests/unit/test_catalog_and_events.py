"""Unit tests for the bundled catalogs and the event emitter."""

from __future__ import annotations

from versereader.catalog.reciters import RECITERS, find_reciter, translation_edition
from versereader.catalog.registry import PositionRegistry
from versereader.events import EventEmitter


def test_bundled_catalog_matches_known_totals(registry: PositionRegistry) -> None:
    """The chapter table should hold 114 chapters and 6236 verses in order."""

    chapters = registry.chapters()

    assert len(registry) == 114
    assert [chapter.ordinal for chapter in chapters] == list(range(1, 115))
    assert sum(chapter.verse_count for chapter in chapters) == 6236
    assert registry.by_name("Al-Baqarah").revelation_type == "Medinan"


def test_reciter_and_edition_lookups() -> None:
    assert len({reciter.id for reciter in RECITERS}) == len(RECITERS)
    assert find_reciter(1).subfolder == "Alafasy_128kbps"
    assert find_reciter(0) is None
    assert translation_edition("ur") == "ur.ahmedali"
    assert translation_edition("de") == "en.asad"


def test_emitter_unsubscribe_stops_delivery() -> None:
    emitter: EventEmitter[int] = EventEmitter()
    received: list[int] = []
    unsubscribe = emitter.subscribe(received.append)

    emitter.emit(1)
    unsubscribe()
    unsubscribe()
    emitter.emit(2)

    assert received == [1]
    assert len(emitter) == 0


def test_emitter_tolerates_listener_changes_during_emit() -> None:
    """Listeners added or removed while emitting should apply from the next emit."""

    emitter: EventEmitter[str] = EventEmitter()
    received: list[str] = []

    def _late(value: str) -> None:
        received.append(f"late:{value}")

    def _first(value: str) -> None:
        received.append(f"first:{value}")
        emitter.subscribe(_late)

    emitter.subscribe(_first)
    emitter.emit("a")

    assert received == ["first:a"]
    assert len(emitter) == 2
