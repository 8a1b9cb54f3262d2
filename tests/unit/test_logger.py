"""Unit tests for deterministic session log lines."""

from __future__ import annotations

import io

from versereader.telemetry.logger import SessionLogger


def test_log_lines_sort_and_sanitize_context() -> None:
    """Context keys should be sorted and unsafe characters replaced."""

    sink = io.StringIO()
    logger = SessionLogger(sink, level="DEBUG")

    logger.info("locator", "advance", previous="Al-Fatihah:1", current="Ali 'Imran:2")
    logger.failure("content", "ContentResolutionError", generation=3, note="")

    assert sink.getvalue().splitlines() == [
        "[reader] level=INFO component=locator event=advance "
        "current=Ali__Imran:2 previous=Al-Fatihah:1",
        "[reader] level=ERROR component=content event=failure "
        "error_type=ContentResolutionError generation=3 note=none",
    ]


def test_level_filters_lower_events() -> None:
    sink = io.StringIO()
    logger = SessionLogger(sink, level="WARNING")

    logger.debug("countdown", "tick", remaining=4)
    logger.info("playback", "load")
    logger.warning("bookmarks", "corrupt_slot", reason="not_a_list")

    assert sink.getvalue() == (
        "[reader] level=WARNING component=bookmarks event=corrupt_slot reason=not_a_list\n"
    )


def test_component_loggers_share_installed_sink() -> None:
    """Loggers built with `configure=False` should write to the existing sink."""

    sink = io.StringIO()
    SessionLogger(sink)

    SessionLogger(configure=False).info("session", "end_of_catalog")

    assert "component=session event=end_of_catalog" in sink.getvalue()
