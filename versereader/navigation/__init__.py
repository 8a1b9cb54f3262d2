"""Reading-position navigation."""

from .locator import PositionChanged, VerseLocator

__all__ = ["PositionChanged", "VerseLocator"]
