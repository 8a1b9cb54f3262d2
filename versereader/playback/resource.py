"""Audio resource contract and its typed progress events.

An `AudioResource` wraps one narration file. It reports progress by emitting
`MetadataLoaded`, `TimeUpdated`, and `TrackEnded` events to subscribers;
`PlaybackController` is the only subscriber in a session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union


@dataclass(frozen=True, slots=True)
class MetadataLoaded:
    """Track duration became known."""

    duration_seconds: float


@dataclass(frozen=True, slots=True)
class TimeUpdated:
    """Playback head moved."""

    elapsed_seconds: float


@dataclass(frozen=True, slots=True)
class TrackEnded:
    """Playback reached the end of the track."""


AudioEvent = Union[MetadataLoaded, TimeUpdated, TrackEnded]


class AudioResource(Protocol):
    """One loaded narration track."""

    ref: str

    def subscribe(self, listener: Callable[[AudioEvent], None]) -> Callable[[], None]:
        """Register an event listener and return its unsubscribe callable."""

    def play(self) -> None:
        """Start or resume playback from the current head."""

    def pause(self) -> None:
        """Pause playback, keeping the current head."""

    def seek(self, seconds: float) -> None:
        """Move the playback head."""

    def poll(self) -> None:
        """Emit pending progress events; called from the owning loop."""

    def close(self) -> None:
        """Stop playback and release the underlying audio."""


AudioResourceFactory = Callable[[str], AudioResource]
