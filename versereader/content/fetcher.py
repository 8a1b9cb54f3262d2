"""HTTP client for verse text and translation retrieval.

Responsibilities:
- Request verse text and translation editions from the content service.
- Combine them with deterministic image and narration references.
- Raise `ContentResolutionError` for every transport, status, or payload failure.
"""

from __future__ import annotations

from typing import Any

import requests

from ..catalog.reciters import TEXT_EDITION, find_reciter, translation_edition
from ..errors import ContentResolutionError
from ..models.datatypes import ChapterDescriptor, ReadingPosition, VerseContent
from .references import audio_reference, image_reference


DEFAULT_API_BASE_URL = "https://api.alquran.cloud/v1"
DEFAULT_IMAGE_BASE_URL = "https://cdn.islamic.network/quran/images"
DEFAULT_AUDIO_BASE_URL = "https://everyayah.com/data"


class ContentFetcher:
    """Resolve `VerseContent` for a position, language, and narrator."""

    _MAX_MESSAGE_CHARS = 180

    def __init__(
        self,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        audio_base_url: str = DEFAULT_AUDIO_BASE_URL,
        timeout_seconds: float = 15.0,
    ) -> None:
        self.api_base_url = api_base_url.rstrip("/")
        self.image_base_url = image_base_url
        self.audio_base_url = audio_base_url
        self.timeout_seconds = timeout_seconds

    def fetch(
        self,
        chapter: ChapterDescriptor,
        verse_number: int,
        *,
        language: str,
        reciter_id: int,
    ) -> VerseContent:
        """Retrieve text, translation, and references for one verse.

        Raises:
            ContentResolutionError: If the request fails or the payload is malformed.
        """

        edition = translation_edition(language)
        endpoint = (
            f"{self.api_base_url}/ayah/{chapter.ordinal}:{verse_number}"
            f"/editions/{TEXT_EDITION},{edition}"
        )
        payload = self._get_json(endpoint)
        text_payload, translation_payload = self._split_editions(payload)

        reported_chapter = self._chapter_from_payload(text_payload, fallback=chapter)
        reciter = find_reciter(reciter_id)
        audio_ref = None
        if reciter is not None:
            audio_ref = audio_reference(
                self.audio_base_url, reciter.subfolder, chapter.ordinal, verse_number
            )

        return VerseContent(
            position=ReadingPosition(chapter.canonical_name, verse_number),
            text=self._required_text(text_payload, "text"),
            translation=self._required_text(translation_payload, "text"),
            chapter=reported_chapter,
            image_ref=image_reference(self.image_base_url, chapter.ordinal, verse_number),
            audio_ref=audio_ref,
        )

    def _get_json(self, endpoint: str) -> Any:
        """GET an endpoint and map failures to resolution errors."""

        try:
            response = requests.get(endpoint, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise ContentResolutionError(
                "Invalid verse number or API error"
                + (f" (HTTP {status_code})." if status_code is not None else "."),
                failure_kind="http_status",
                status_code=status_code,
            ) from exc
        except requests.Timeout as exc:
            raise ContentResolutionError(
                "Content request timed out.",
                failure_kind="timeout",
                hint="Check your connection and try again.",
            ) from exc
        except requests.RequestException as exc:
            raise ContentResolutionError(
                f"Content request transport error: {self._short_message(str(exc))}",
                failure_kind="transport",
                hint="Check your connection and try again.",
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ContentResolutionError(
                "Content response is not valid JSON.",
                failure_kind="malformed_response",
            ) from exc

    @staticmethod
    def _split_editions(payload: Any) -> tuple[dict[str, Any], dict[str, Any]]:
        """Return `(text, translation)` edition payloads from a response body."""

        data = payload.get("data") if isinstance(payload, dict) else None
        if (
            not isinstance(data, list)
            or len(data) < 2
            or not all(isinstance(item, dict) for item in data[:2])
        ):
            raise ContentResolutionError(
                "Content response is missing verse editions.",
                failure_kind="malformed_response",
            )
        return data[0], data[1]

    @staticmethod
    def _required_text(edition_payload: dict[str, Any], key: str) -> str:
        value = edition_payload.get(key)
        if not isinstance(value, str):
            raise ContentResolutionError(
                f"Content response edition is missing `{key}`.",
                failure_kind="malformed_response",
            )
        return value

    @staticmethod
    def _chapter_from_payload(
        edition_payload: dict[str, Any], *, fallback: ChapterDescriptor
    ) -> ChapterDescriptor:
        """Build chapter metadata from the response, using catalog values for gaps.

        The catalog name is kept as canonical identity since the service spells
        transliterations differently.
        """

        surah = edition_payload.get("surah")
        if not isinstance(surah, dict):
            return fallback

        def _int_field(key: str, default: int) -> int:
            value = surah.get(key)
            return value if isinstance(value, int) and not isinstance(value, bool) else default

        def _str_field(key: str, default: str) -> str:
            value = surah.get(key)
            return value if isinstance(value, str) and value.strip() else default

        return ChapterDescriptor(
            ordinal=_int_field("number", fallback.ordinal),
            canonical_name=fallback.canonical_name,
            display_name=_str_field("englishNameTranslation", fallback.display_name),
            verse_count=_int_field("numberOfAyahs", fallback.verse_count),
            revelation_type=_str_field("revelationType", fallback.revelation_type),
        )

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap user-facing transport message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_MESSAGE_CHARS - 1]}..."
