"""Core datatypes shared across reader modules.

Responsibilities:
- Represent immutable records exchanged between reader components.
- Provide explicit typing for persistence and rendering.

Key types:
- `ChapterDescriptor`, `Reciter`, `ReadingPosition`, `VerseContent`,
  `PlaybackState`, `AutoAdvancePrompt`, `BookmarkEntry`, and `Notice`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChapterDescriptor:
    """One catalog chapter (surah).

    Attributes:
        ordinal: 1-based position in the catalog.
        canonical_name: Transliterated name used for lookups and deep links.
        display_name: Human-readable English name.
        verse_count: Number of verses in the chapter.
        revelation_type: `Meccan` or `Medinan`.
    """

    ordinal: int
    canonical_name: str
    display_name: str
    verse_count: int
    revelation_type: str = "Meccan"


@dataclass(frozen=True, slots=True)
class Reciter:
    """A narrator with a stable audio folder on the narration host."""

    id: int
    name: str
    subfolder: str


@dataclass(frozen=True, slots=True)
class ReadingPosition:
    """The (chapter, verse) pair identifying what is displayed and played.

    `verse_number` may transiently be out of range or `None` while it holds
    raw user input; the session validates it before fetching.
    """

    chapter_name: str
    verse_number: int | None

    def label(self) -> str:
        """Return a compact `Chapter:verse` label for logs and notices."""

        verse = "?" if self.verse_number is None else str(self.verse_number)
        return f"{self.chapter_name}:{verse}"


@dataclass(frozen=True, slots=True)
class VerseContent:
    """Resolved content for one reading position.

    Attributes:
        position: Position the content was resolved for.
        text: Original-language verse text.
        translation: Translation text in the selected language.
        chapter: Chapter metadata as reported by the content service.
        image_ref: Verse image reference.
        audio_ref: Narration audio reference, or `None` without a narrator.
    """

    position: ReadingPosition
    text: str
    translation: str
    chapter: ChapterDescriptor
    image_ref: str
    audio_ref: str | None


@dataclass(frozen=True, slots=True)
class PlaybackState:
    """Snapshot of the narration player.

    `elapsed_seconds` and `total_seconds` are best-effort values reported by
    the underlying audio resource.
    """

    resource_ref: str | None = None
    is_playing: bool = False
    elapsed_seconds: float = 0.0
    total_seconds: float = 0.0
    is_looping: bool = False


@dataclass(frozen=True, slots=True)
class AutoAdvancePrompt:
    """Visible countdown offered after a non-looping narration ends."""

    active: bool = False
    seconds_remaining: int = 0


@dataclass(frozen=True, slots=True)
class BookmarkEntry:
    """One saved reading position with a text snippet."""

    id: int
    chapter_name: str
    verse_number: int
    snippet_text: str

    def to_payload(self) -> dict[str, object]:
        """Serialize using the persisted slot's record keys."""

        return {
            "id": self.id,
            "surah": self.chapter_name,
            "verse": self.verse_number,
            "text": self.snippet_text,
        }


@dataclass(frozen=True, slots=True)
class Notice:
    """User-visible notice raised by the session (toast equivalent)."""

    level: str
    title: str
    message: str
