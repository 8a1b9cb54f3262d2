"""Configuration model and loaders for the reader.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `ReaderConfig`: normalized runtime settings for a reading session.
- `ConfigLoader`: static construction helpers for `ReaderConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .catalog.reciters import TRANSLATION_EDITIONS, find_reciter
from .content.fetcher import (
    DEFAULT_API_BASE_URL,
    DEFAULT_AUDIO_BASE_URL,
    DEFAULT_IMAGE_BASE_URL,
)
from .parsing import normalize_optional_string, parse_permissive_boolean


def _default_data_dir() -> Path:
    return Path.home() / ".versereader"


@dataclass(slots=True)
class ReaderConfig:
    """Runtime configuration for one reading session.

    Attributes:
        data_dir: Directory holding bookmarks, last-position state, and the audio cache.
        language: Translation language code (`en` or `ur`).
        reciter_id: Narrator id from the reciter catalog.
        looping: Whether narration repeats instead of offering auto-advance.
        countdown_seconds: Length of the auto-advance countdown.
        resume_delay_seconds: Delay between auto-advance and resumed playback.
        request_timeout_seconds: HTTP timeout for content and narration requests.
        api_base_url: Content service base URL.
        image_base_url: Verse image base URL.
        audio_base_url: Narration base URL.
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    language: str = "en"
    reciter_id: int = 1
    looping: bool = False
    countdown_seconds: int = 5
    resume_delay_seconds: float = 1.0
    request_timeout_seconds: float = 15.0
    api_base_url: str = DEFAULT_API_BASE_URL
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    audio_base_url: str = DEFAULT_AUDIO_BASE_URL

    def validate(self) -> None:
        """Validate configuration values before a session starts."""

        if self.language not in TRANSLATION_EDITIONS:
            supported = ", ".join(sorted(TRANSLATION_EDITIONS))
            raise ValueError(f"`language` must be one of: {supported}.")
        if find_reciter(self.reciter_id) is None:
            raise ValueError(f"`reciter_id` {self.reciter_id} is not a known narrator.")
        if self.countdown_seconds <= 0:
            raise ValueError("`countdown_seconds` must be a positive integer.")
        if self.resume_delay_seconds < 0:
            raise ValueError("`resume_delay_seconds` must not be negative.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("`request_timeout_seconds` must be positive.")
        for key in ("api_base_url", "image_base_url", "audio_base_url"):
            if normalize_optional_string(getattr(self, key)) is None:
                raise ValueError(f"`{key}` must be a non-empty string.")

    @property
    def audio_cache_dir(self) -> Path:
        return self.data_dir / "audio"


class ConfigLoader:
    """Factory methods for constructing `ReaderConfig`."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "data_dir",
            "language",
            "reciter_id",
            "looping",
            "countdown_seconds",
            "resume_delay_seconds",
            "request_timeout_seconds",
            "api_base_url",
            "image_base_url",
            "audio_base_url",
        }
    )

    _ENV_KEYS = {
        "data_dir": "VERSEREADER_DATA_DIR",
        "language": "VERSEREADER_LANGUAGE",
        "reciter_id": "VERSEREADER_RECITER",
        "looping": "VERSEREADER_LOOP",
        "countdown_seconds": "VERSEREADER_COUNTDOWN_SECONDS",
        "resume_delay_seconds": "VERSEREADER_RESUME_DELAY_SECONDS",
        "request_timeout_seconds": "VERSEREADER_TIMEOUT_SECONDS",
        "api_base_url": "VERSEREADER_API_BASE_URL",
        "image_base_url": "VERSEREADER_IMAGE_BASE_URL",
        "audio_base_url": "VERSEREADER_AUDIO_BASE_URL",
    }

    @staticmethod
    def from_yaml(path: Path) -> ReaderConfig:
        """Load configuration from a YAML mapping file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the YAML is invalid or values fail validation.
        """

        raw_text = path.read_text(encoding="utf-8")
        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a mapping at top level.")
        return ConfigLoader._build_config_from_mapping(payload, f"YAML config `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str]) -> ReaderConfig:
        """Load configuration from `VERSEREADER_*` environment variables."""

        payload: dict[str, Any] = {}
        for key, env_key in ConfigLoader._ENV_KEYS.items():
            value = normalize_optional_string(env.get(env_key))
            if value is not None:
                payload[key] = value
        return ConfigLoader._build_config_from_mapping(payload, "Environment")

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> ReaderConfig:
        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        defaults = ReaderConfig()
        data_dir = ConfigLoader._optional_string(payload, "data_dir")
        config = ReaderConfig(
            data_dir=Path(data_dir).expanduser() if data_dir is not None else defaults.data_dir,
            language=ConfigLoader._optional_string(payload, "language") or defaults.language,
            reciter_id=ConfigLoader._optional_number(
                payload, "reciter_id", source_label, defaults.reciter_id, int
            ),
            looping=ConfigLoader._optional_boolean(
                payload, "looping", source_label, defaults.looping
            ),
            countdown_seconds=ConfigLoader._optional_number(
                payload, "countdown_seconds", source_label, defaults.countdown_seconds, int
            ),
            resume_delay_seconds=ConfigLoader._optional_number(
                payload, "resume_delay_seconds", source_label, defaults.resume_delay_seconds, float
            ),
            request_timeout_seconds=ConfigLoader._optional_number(
                payload,
                "request_timeout_seconds",
                source_label,
                defaults.request_timeout_seconds,
                float,
            ),
            api_base_url=ConfigLoader._optional_string(payload, "api_base_url")
            or defaults.api_base_url,
            image_base_url=ConfigLoader._optional_string(payload, "image_base_url")
            or defaults.image_base_url,
            audio_base_url=ConfigLoader._optional_string(payload, "audio_base_url")
            or defaults.audio_base_url,
        )
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc
        return config

    @staticmethod
    def _optional_string(payload: Mapping[str, Any], key: str) -> str | None:
        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_number(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
        default: Any,
        kind: Callable[[Any], Any],
    ) -> Any:
        """Read a numeric field, accepting numbers or numeric strings."""

        if key not in payload:
            return default
        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a number.")
        if isinstance(raw_value, (int, float)):
            if kind is int and isinstance(raw_value, float) and not raw_value.is_integer():
                raise ValueError(f"{source_label} field `{key}` must be an integer.")
            return kind(raw_value)
        normalized = normalize_optional_string(raw_value)
        if normalized is None:
            return default
        try:
            return kind(normalized)
        except ValueError as exc:
            raise ValueError(f"{source_label} field `{key}` must be a number.") from exc

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        if key not in payload:
            return default
        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
