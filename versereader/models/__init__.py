"""Shared typed data models for the reader.

This package contains dataclasses used across reader modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    AutoAdvancePrompt,
    BookmarkEntry,
    ChapterDescriptor,
    Notice,
    PlaybackState,
    ReadingPosition,
    Reciter,
    VerseContent,
)

__all__ = [
    "AutoAdvancePrompt",
    "BookmarkEntry",
    "ChapterDescriptor",
    "Notice",
    "PlaybackState",
    "ReadingPosition",
    "Reciter",
    "VerseContent",
]
