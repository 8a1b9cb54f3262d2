"""Deterministic image and narration references for a verse."""

from __future__ import annotations


def audio_reference(base_url: str, subfolder: str, chapter_ordinal: int, verse_number: int) -> str:
    """Build the narration URL `<base>/<narrator>/<CCC><VVV>.mp3`.

    No existence check is made; a missing file surfaces when playback starts.
    """

    return f"{base_url.rstrip('/')}/{subfolder}/{chapter_ordinal:03d}{verse_number:03d}.mp3"


def image_reference(base_url: str, chapter_ordinal: int, verse_number: int) -> str:
    """Build the verse image URL `<base>/<chapter>_<verse>.png`."""

    return f"{base_url.rstrip('/')}/{chapter_ordinal}_{verse_number}.png"
