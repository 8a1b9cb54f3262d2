"""Shareable location state for the current reading position.

The location mirrors the query string `?surah=<name>&verse=<n>`. The last
successfully resolved position is also kept in the `state` slot so a new
session can restore it.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlencode, urlsplit

from .io.storage import SlotStore
from .models.datatypes import ReadingPosition
from .parsing import normalize_optional_string, parse_verse_number


STATE_SLOT = "state"


def format_location(position: ReadingPosition) -> str:
    """Return the query-string location for a position."""

    verse = "" if position.verse_number is None else str(position.verse_number)
    return "?" + urlencode({"surah": position.chapter_name, "verse": verse})


def parse_location(location: str) -> tuple[str | None, str | None]:
    """Extract raw `(surah, verse)` values from a location or full URL."""

    text = location.strip()
    query = urlsplit(text).query if "://" in text else text.lstrip("?")
    values = parse_qs(query, keep_blank_values=True)

    def _first(key: str) -> str | None:
        items = values.get(key)
        if not items:
            return None
        return normalize_optional_string(items[0])

    return _first("surah"), _first("verse")


def position_from_location(location: str, default_chapter: str) -> ReadingPosition:
    """Build a position from a location.

    A missing surah uses `default_chapter`, a missing verse becomes 1, and a
    non-numeric verse is kept as `None` so the first fetch reports it.
    """

    chapter_name, verse_text = parse_location(location)
    verse_number = 1 if verse_text is None else parse_verse_number(verse_text)
    return ReadingPosition(chapter_name or default_chapter, verse_number)


class LocationState:
    """Persist and restore the last resolved reading position."""

    def __init__(self, storage: SlotStore, slot: str = STATE_SLOT) -> None:
        self._storage = storage
        self._slot = slot

    def save(self, position: ReadingPosition) -> None:
        self._storage.save_json(self._slot, {"location": format_location(position)})

    def restore(self, default_chapter: str) -> ReadingPosition | None:
        """Return the saved position, or `None` when nothing usable is stored."""

        try:
            payload = self._storage.load_json(self._slot)
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None
        location = payload.get("location")
        if not isinstance(location, str):
            return None
        return position_from_location(location, default_chapter)
