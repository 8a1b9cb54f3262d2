"""Static chapter catalog lookups.

Responsibilities:
- Expose the ordered, immutable chapter table as `ChapterDescriptor` records.
- Resolve chapters by canonical name or ordinal and find their neighbours.

Unresolvable names fall back to the first catalog chapter so that callers
always have something renderable.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..models.datatypes import ChapterDescriptor
from .surahs import SURAHS


def _default_chapters() -> tuple[ChapterDescriptor, ...]:
    """Build descriptors from the bundled chapter table."""

    return tuple(
        ChapterDescriptor(
            ordinal=index,
            canonical_name=name,
            display_name=english_name,
            verse_count=verse_count,
            revelation_type=revelation_type,
        )
        for index, (name, english_name, verse_count, revelation_type) in enumerate(
            SURAHS, start=1
        )
    )


class PositionRegistry:
    """Ordered catalog of chapters with name and ordinal lookups."""

    def __init__(self, chapters: Iterable[ChapterDescriptor] | None = None) -> None:
        """Initialize and validate the catalog.

        Raises:
            ValueError: If the catalog is empty, ordinals or names repeat, or a
                chapter declares a non-positive verse count.
        """

        ordered = tuple(
            sorted(
                chapters if chapters is not None else _default_chapters(),
                key=lambda chapter: chapter.ordinal,
            )
        )
        if not ordered:
            raise ValueError("Chapter catalog must contain at least one chapter.")

        self._chapters = ordered
        self._index_by_name: dict[str, int] = {}
        seen_ordinals: set[int] = set()
        for index, chapter in enumerate(ordered):
            if chapter.ordinal <= 0 or chapter.verse_count <= 0:
                raise ValueError(
                    f"Chapter `{chapter.canonical_name}` must have positive ordinal "
                    "and verse count."
                )
            if chapter.ordinal in seen_ordinals:
                raise ValueError(f"Duplicate chapter ordinal {chapter.ordinal}.")
            if chapter.canonical_name in self._index_by_name:
                raise ValueError(f"Duplicate chapter name `{chapter.canonical_name}`.")
            seen_ordinals.add(chapter.ordinal)
            self._index_by_name[chapter.canonical_name] = index

    def chapters(self) -> Sequence[ChapterDescriptor]:
        """Return all chapters in ordinal order."""

        return self._chapters

    def first(self) -> ChapterDescriptor:
        return self._chapters[0]

    def last(self) -> ChapterDescriptor:
        return self._chapters[-1]

    def by_name(self, name: str) -> ChapterDescriptor | None:
        """Return the chapter with exactly this canonical name, if any."""

        index = self._index_by_name.get(name)
        if index is None:
            return None
        return self._chapters[index]

    def resolve(self, name: str) -> ChapterDescriptor:
        """Return the named chapter, or the first chapter when it does not resolve."""

        chapter = self.by_name(name)
        if chapter is None:
            return self.first()
        return chapter

    def by_ordinal(self, ordinal: int) -> ChapterDescriptor | None:
        for chapter in self._chapters:
            if chapter.ordinal == ordinal:
                return chapter
        return None

    def find(self, text: str) -> ChapterDescriptor | None:
        """Match user input against ordinals, then names case-insensitively."""

        token = text.strip()
        if token.isdecimal():
            return self.by_ordinal(int(token))
        exact = self.by_name(token)
        if exact is not None:
            return exact
        folded = token.casefold()
        for chapter in self._chapters:
            if chapter.canonical_name.casefold() == folded:
                return chapter
        return None

    def following(self, name: str) -> ChapterDescriptor | None:
        """Return the chapter after `name` in ordinal order, or `None` at the end."""

        index = self._index_by_name.get(name)
        if index is None or index + 1 >= len(self._chapters):
            return None
        return self._chapters[index + 1]

    def preceding(self, name: str) -> ChapterDescriptor | None:
        """Return the chapter before `name` in ordinal order, or `None` at the start."""

        index = self._index_by_name.get(name)
        if index is None or index == 0:
            return None
        return self._chapters[index - 1]

    def __len__(self) -> int:
        return len(self._chapters)
