"""Persisted, deduplicated bookmark collection.

Responsibilities:
- Keep bookmarks in insertion order, unique per (chapter, verse).
- Write the whole collection through to its storage slot on every change.
- Load missing or corrupt slots as an empty collection.
"""

from __future__ import annotations

from time import time
from typing import Any, Callable

from ..io.storage import SlotStore
from ..models.datatypes import BookmarkEntry, ReadingPosition
from ..telemetry.logger import SessionLogger


BOOKMARKS_SLOT = "bookmarks"


def _millisecond_clock() -> int:
    return int(time() * 1000)


def _entry_from_payload(item: Any) -> BookmarkEntry | None:
    """Parse one persisted record, returning `None` when it is malformed."""

    if not isinstance(item, dict):
        return None
    bookmark_id = item.get("id")
    chapter_name = item.get("surah")
    verse_number = item.get("verse")
    snippet = item.get("text", "")
    if (
        not isinstance(bookmark_id, int)
        or isinstance(bookmark_id, bool)
        or not isinstance(chapter_name, str)
        or not isinstance(verse_number, int)
        or isinstance(verse_number, bool)
    ):
        return None
    return BookmarkEntry(
        id=bookmark_id,
        chapter_name=chapter_name,
        verse_number=verse_number,
        snippet_text=snippet if isinstance(snippet, str) else "",
    )


class BookmarkStore:
    """Bookmarks keyed by reading position, persisted as one slot."""

    def __init__(
        self,
        storage: SlotStore,
        *,
        clock: Callable[[], int] = _millisecond_clock,
        logger: SessionLogger | None = None,
        slot: str = BOOKMARKS_SLOT,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._logger = logger or SessionLogger(configure=False)
        self._slot = slot
        self._entries: list[BookmarkEntry] = self._load()

    def entries(self) -> list[BookmarkEntry]:
        """Return bookmarks in insertion order."""

        return list(self._entries)

    def contains(self, position: ReadingPosition) -> bool:
        return self._find(position) is not None

    def add(self, position: ReadingPosition, snippet_text: str) -> BookmarkEntry | None:
        """Bookmark a position.

        Returns:
            The new entry, or `None` when the position was already bookmarked
            or has no verse number.
        """

        if position.verse_number is None or self.contains(position):
            return None

        entry = BookmarkEntry(
            id=self._next_id(),
            chapter_name=position.chapter_name,
            verse_number=position.verse_number,
            snippet_text=snippet_text,
        )
        self._commit([*self._entries, entry])
        self._logger.info("bookmarks", "add", position=position.label(), id=entry.id)
        return entry

    def remove(self, bookmark_id: int) -> bool:
        """Delete the bookmark with this id; returns `False` when unknown."""

        for index, entry in enumerate(self._entries):
            if entry.id == bookmark_id:
                self._commit(self._entries[:index] + self._entries[index + 1 :])
                self._logger.info("bookmarks", "remove", id=bookmark_id)
                return True
        return False

    def __len__(self) -> int:
        return len(self._entries)

    def _find(self, position: ReadingPosition) -> BookmarkEntry | None:
        for entry in self._entries:
            if (
                entry.chapter_name == position.chapter_name
                and entry.verse_number == position.verse_number
            ):
                return entry
        return None

    def _next_id(self) -> int:
        candidate = self._clock()
        if self._entries:
            candidate = max(candidate, max(entry.id for entry in self._entries) + 1)
        return candidate

    def _commit(self, entries: list[BookmarkEntry]) -> None:
        """Persist `entries` and only then make them the in-memory collection."""

        self._storage.save_json(self._slot, [entry.to_payload() for entry in entries])
        self._entries = entries

    def _load(self) -> list[BookmarkEntry]:
        try:
            payload = self._storage.load_json(self._slot)
        except ValueError as exc:
            self._logger.warning("bookmarks", "corrupt_slot", reason=type(exc).__name__)
            return []
        if payload is None:
            return []
        if not isinstance(payload, list):
            self._logger.warning("bookmarks", "corrupt_slot", reason="not_a_list")
            return []

        entries: list[BookmarkEntry] = []
        seen: set[tuple[str, int]] = set()
        for item in payload:
            entry = _entry_from_payload(item)
            if entry is None:
                self._logger.warning("bookmarks", "skip_record", reason="malformed")
                continue
            key = (entry.chapter_name, entry.verse_number)
            if key in seen:
                continue
            seen.add(key)
            entries.append(entry)
        return entries
