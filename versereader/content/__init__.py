"""Verse content retrieval and reference building."""

from .fetcher import ContentFetcher
from .references import audio_reference, image_reference
from .resolver import (
    ContentResolver,
    InlineResolver,
    ResolutionOutcome,
    ResolutionRequest,
    ThreadedResolver,
)

__all__ = [
    "ContentFetcher",
    "ContentResolver",
    "InlineResolver",
    "ResolutionOutcome",
    "ResolutionRequest",
    "ThreadedResolver",
    "audio_reference",
    "image_reference",
]
