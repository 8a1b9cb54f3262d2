"""Bookmark persistence."""

from .store import BookmarkStore

__all__ = ["BookmarkStore"]
