"""Narration playback control.

The `pygame` backend lives in `pygame_backend` and is imported only by the
CLI, so the controller can be used with any `AudioResource` implementation.
"""

from .controller import PlaybackController
from .resource import (
    AudioEvent,
    AudioResource,
    AudioResourceFactory,
    MetadataLoaded,
    TimeUpdated,
    TrackEnded,
)

__all__ = [
    "AudioEvent",
    "AudioResource",
    "AudioResourceFactory",
    "MetadataLoaded",
    "PlaybackController",
    "TimeUpdated",
    "TrackEnded",
]
