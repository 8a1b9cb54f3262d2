"""`pygame.mixer` audio resources for narration playback.

Remote narration files are downloaded into a local cache first because
`pygame.mixer.music` only streams from files. `pygame.mixer.music` tracks
its position as milliseconds since the last `play()` call, so the resource
keeps its own start offset for seeking and pausing.
"""

from __future__ import annotations

from hashlib import sha256
import os
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
import requests  # noqa: E402

from ..errors import PlaybackError
from ..events import EventEmitter
from .resource import AudioEvent, AudioResourceFactory, MetadataLoaded, TimeUpdated, TrackEnded


def _ensure_mixer() -> None:
    if pygame.mixer.get_init() is None:
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            raise PlaybackError(
                f"Audio output is unavailable: {exc}",
                hint="Check that an audio device is available.",
            ) from exc


def _cached_path(cache_dir: Path, ref: str) -> Path:
    suffix = Path(urlparse(ref).path).suffix or ".mp3"
    return cache_dir / f"{sha256(ref.encode('utf-8')).hexdigest()[:24]}{suffix}"


def fetch_audio_file(ref: str, cache_dir: Path, timeout_seconds: float = 30.0) -> Path:
    """Return a local file for a narration reference, downloading remote ones.

    Raises:
        PlaybackError: If the narration cannot be downloaded or does not exist.
    """

    if urlparse(ref).scheme not in {"http", "https"}:
        path = Path(ref)
        if not path.exists():
            raise PlaybackError(f"Narration file not found: `{ref}`.")
        return path

    target = _cached_path(cache_dir, ref)
    if target.exists():
        return target
    try:
        response = requests.get(ref, timeout=timeout_seconds)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise PlaybackError(
            f"Narration could not be downloaded: {ref}",
            hint="Try another narrator or check your connection.",
        ) from exc
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(response.content)
    return target


class PygameAudioResource:
    """One narration track played through `pygame.mixer.music`."""

    def __init__(self, ref: str, path: Path) -> None:
        _ensure_mixer()
        self.ref = ref
        self._path = path
        self._events: EventEmitter[AudioEvent] = EventEmitter()
        try:
            pygame.mixer.music.load(str(path))
            self._duration = pygame.mixer.Sound(str(path)).get_length()
        except pygame.error as exc:
            raise PlaybackError(f"Narration could not be decoded: {ref}") from exc
        self._metadata_sent = False
        self._is_playing = False
        self._start_offset = 0.0
        self._pause_pos = 0.0

    def subscribe(self, listener: Callable[[AudioEvent], None]) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def play(self) -> None:
        pygame.mixer.music.play(start=self._pause_pos)
        self._start_offset = self._pause_pos
        self._is_playing = True

    def pause(self) -> None:
        if not self._is_playing:
            return
        self._pause_pos = self._position()
        # stop() instead of pause() so the next play(start=...) seeks reliably
        pygame.mixer.music.stop()
        self._is_playing = False

    def seek(self, seconds: float) -> None:
        self._pause_pos = max(0.0, seconds)
        if self._is_playing:
            pygame.mixer.music.play(start=self._pause_pos)
            self._start_offset = self._pause_pos

    def poll(self) -> None:
        if not self._metadata_sent:
            self._metadata_sent = True
            self._events.emit(MetadataLoaded(duration_seconds=self._duration))
        if not self._is_playing:
            return
        if not pygame.mixer.music.get_busy():
            self._is_playing = False
            self._pause_pos = 0.0
            self._events.emit(TrackEnded())
            return
        self._events.emit(TimeUpdated(elapsed_seconds=self._position()))

    def close(self) -> None:
        pygame.mixer.music.stop()
        pygame.mixer.music.unload()
        self._is_playing = False
        self._events.clear()

    def _position(self) -> float:
        if not self._is_playing:
            return self._pause_pos
        return self._start_offset + pygame.mixer.music.get_pos() / 1000.0


def pygame_resource_factory(cache_dir: Path, timeout_seconds: float = 30.0) -> AudioResourceFactory:
    """Build a factory that downloads and opens narration with `pygame`."""

    def _open(ref: str) -> PygameAudioResource:
        return PygameAudioResource(ref, fetch_audio_file(ref, cache_dir, timeout_seconds))

    return _open


def narration_preparer(cache_dir: Path, timeout_seconds: float = 30.0) -> Callable[[str], str]:
    """Build a callable that downloads a narration reference and returns the local path.

    Resolvers run it on their worker thread so that `pygame_resource_factory`
    only ever opens files that are already cached.
    """

    def _prepare(ref: str) -> str:
        return str(fetch_audio_file(ref, cache_dir, timeout_seconds))

    return _prepare
