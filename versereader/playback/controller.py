"""Narration playback control over a single audio resource.

Responsibilities:
- Own the active `AudioResource` and tear it down before attaching another.
- Track `PlaybackState` from the resource's progress events.
- Restart looping tracks and report completion of non-looping tracks.

The controller knows nothing about auto-advance; callers subscribe to
`finished` to react to completion.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from ..events import EventEmitter
from ..models.datatypes import PlaybackState
from ..telemetry.logger import SessionLogger
from .resource import (
    AudioEvent,
    AudioResource,
    AudioResourceFactory,
    MetadataLoaded,
    TimeUpdated,
    TrackEnded,
)


class PlaybackController:
    """Play/pause/seek over one narration resource at a time."""

    def __init__(
        self,
        resource_factory: AudioResourceFactory,
        logger: SessionLogger | None = None,
    ) -> None:
        self._factory = resource_factory
        self._logger = logger or SessionLogger(configure=False)
        self._resource: AudioResource | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._state = PlaybackState()
        self.finished: EventEmitter[PlaybackState] = EventEmitter()
        self.changes: EventEmitter[PlaybackState] = EventEmitter()

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._resource is not None

    def load(self, resource_ref: str, is_looping: bool) -> None:
        """Replace the current resource with a new one without starting playback.

        Raises:
            PlaybackError: When the backend cannot open the resource; the
                controller is left unloaded.
        """

        self.unload()
        resource = self._factory(resource_ref)
        self._resource = resource
        self._unsubscribe = resource.subscribe(self._on_audio_event)
        self._set_state(PlaybackState(resource_ref=resource_ref, is_looping=is_looping))
        self._logger.info("playback", "load", ref=resource_ref, looping=is_looping)

    def unload(self) -> None:
        """Stop and release the current resource, if any."""

        if self._resource is None:
            return
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._resource.close()
        self._resource = None
        self._unsubscribe = None
        self._set_state(PlaybackState(is_looping=self._state.is_looping))

    def play(self) -> None:
        if self._resource is None or self._state.is_playing:
            return
        self._resource.play()
        self._set_state(replace(self._state, is_playing=True))

    def pause(self) -> None:
        if self._resource is None or not self._state.is_playing:
            return
        self._resource.pause()
        self._set_state(replace(self._state, is_playing=False))

    def toggle(self) -> None:
        """Flip between playing and paused; no effect without a resource."""

        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, target_seconds: float) -> None:
        """Move the playback head. Range clamping is the caller's job."""

        if self._resource is None:
            return
        self._resource.seek(target_seconds)
        self._set_state(replace(self._state, elapsed_seconds=target_seconds))

    def set_looping(self, is_looping: bool) -> None:
        self._set_state(replace(self._state, is_looping=is_looping))

    def poll(self) -> None:
        """Let the resource report progress."""

        if self._resource is not None:
            self._resource.poll()

    def _on_audio_event(self, event: AudioEvent) -> None:
        if isinstance(event, MetadataLoaded):
            self._set_state(replace(self._state, total_seconds=max(0.0, event.duration_seconds)))
        elif isinstance(event, TimeUpdated):
            self._set_state(replace(self._state, elapsed_seconds=max(0.0, event.elapsed_seconds)))
        elif isinstance(event, TrackEnded):
            self._on_track_ended()

    def _on_track_ended(self) -> None:
        if self._resource is None:
            return
        if self._state.is_looping:
            self._resource.seek(0.0)
            self._resource.play()
            self._set_state(replace(self._state, elapsed_seconds=0.0, is_playing=True))
            self._logger.debug("playback", "loop", ref=self._state.resource_ref)
            return

        self._set_state(replace(self._state, is_playing=False))
        self._logger.info("playback", "finished", ref=self._state.resource_ref)
        self.finished.emit(self._state)

    def _set_state(self, state: PlaybackState) -> None:
        if state == self._state:
            return
        self._state = state
        self.changes.emit(state)
