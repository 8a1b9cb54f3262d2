"""Current reading position and chapter-boundary navigation.

Responsibilities:
- Own the single `ReadingPosition` of a session.
- Advance and retreat across chapter boundaries using catalog order.
- Notify subscribers about every position change.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..catalog.registry import PositionRegistry
from ..events import EventEmitter
from ..models.datatypes import ChapterDescriptor, ReadingPosition


@dataclass(frozen=True, slots=True)
class PositionChanged:
    """Emitted after the locator replaces its position.

    Attributes:
        previous: Position before the change.
        current: Position after the change.
        cause: `set`, `advance`, `retreat`, or `reset`.
    """

    previous: ReadingPosition
    current: ReadingPosition
    cause: str


class VerseLocator:
    """Owns the reading position and the rules for moving through it."""

    def __init__(
        self,
        registry: PositionRegistry,
        initial: ReadingPosition | None = None,
    ) -> None:
        self._registry = registry
        self._position = self._canonical(
            initial or ReadingPosition(registry.first().canonical_name, 1)
        )
        self.changes: EventEmitter[PositionChanged] = EventEmitter()

    @property
    def position(self) -> ReadingPosition:
        return self._position

    @property
    def registry(self) -> PositionRegistry:
        return self._registry

    def chapter(self) -> ChapterDescriptor:
        """Return the current chapter, substituting the first chapter for unknown names."""

        return self._registry.resolve(self._position.chapter_name)

    def set_position(self, chapter_name: str, verse_number: int | None) -> None:
        """Set the position directly.

        The chapter name is stored in canonical form, with unknown names replaced
        by the first chapter. The verse number is not clamped; out-of-range or
        missing values are reported when the position is fetched.
        """

        self._replace(self._canonical(ReadingPosition(chapter_name, verse_number)), "set")

    def advance(self) -> bool:
        """Move to the next verse, crossing into the next chapter when needed.

        Returns:
            `False` when already at the last verse of the last chapter.
        """

        chapter = self.chapter()
        verse = self._position.verse_number or 0
        if verse < chapter.verse_count:
            self._replace(ReadingPosition(chapter.canonical_name, verse + 1), "advance")
            return True

        following = self._registry.following(chapter.canonical_name)
        if following is None:
            return False
        self._replace(ReadingPosition(following.canonical_name, 1), "advance")
        return True

    def retreat(self) -> bool:
        """Move to the previous verse, crossing into the previous chapter when needed.

        Returns:
            `False` when already at the first verse of the first chapter.
        """

        chapter = self.chapter()
        verse = self._position.verse_number or 0
        if verse > 1:
            self._replace(ReadingPosition(chapter.canonical_name, verse - 1), "retreat")
            return True

        preceding = self._registry.preceding(chapter.canonical_name)
        if preceding is None:
            return False
        self._replace(
            ReadingPosition(preceding.canonical_name, preceding.verse_count), "retreat"
        )
        return True

    def reset(self) -> None:
        """Return to the first verse of the first chapter."""

        self._replace(ReadingPosition(self._registry.first().canonical_name, 1), "reset")

    def at_start(self) -> bool:
        """Return whether `retreat()` would be a no-op."""

        return (
            self._position.chapter_name == self._registry.first().canonical_name
            and self._position.verse_number == 1
        )

    def _canonical(self, position: ReadingPosition) -> ReadingPosition:
        chapter = self._registry.find(position.chapter_name) or self._registry.first()
        if chapter.canonical_name == position.chapter_name:
            return position
        return ReadingPosition(chapter.canonical_name, position.verse_number)

    def _replace(self, position: ReadingPosition, cause: str) -> None:
        previous = self._position
        self._position = position
        self.changes.emit(PositionChanged(previous=previous, current=position, cause=cause))
