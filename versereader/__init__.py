"""Top-level package for the verse reader.

This package locates scripture passages, retrieves their text, translation,
image, and narration, and lets a reader move verse by verse with optional
auto-advance and bookmarks. The main orchestration entry point is
`ReadingSession`.
"""

from .session import ReadingSession

__all__ = ["ReadingSession", "__version__"]

__version__ = "0.1.0"
