"""Scenario tests for the reading session orchestration."""

from __future__ import annotations

import json

from tests.fakes import DeferredResolver
from versereader.content.resolver import InlineResolver
from versereader.errors import ContentResolutionError, PlaybackError
from versereader.models.datatypes import Notice, ReadingPosition


def _collect_notices(session) -> list[Notice]:
    notices: list[Notice] = []
    session.notices.subscribe(notices.append)
    return notices


def _run_seconds(session, clock, seconds: int) -> None:
    for _ in range(seconds):
        clock.advance(1.0)
        session.tick()


def test_start_resolves_content_and_loads_narration_without_playing(
    make_session, audio_factory, stub_fetcher
) -> None:
    """The initial position should be fetched and its audio loaded but paused."""

    session = make_session()
    session.start()

    assert session.content is not None
    assert session.content.text == "text 1:1"
    assert session.is_loading is False
    assert stub_fetcher.calls == [(1, 1, "en", 1)]
    assert session.playback_state.resource_ref == "audio/1/001001.mp3"
    assert session.playback_state.is_playing is False
    assert "play" not in audio_factory.latest.calls


def test_finished_narration_counts_down_then_advances_and_resumes(
    make_session, audio_factory, clock
) -> None:
    """A non-looping end should count down five seconds and then move on."""

    session = make_session()
    session.start()
    session.toggle_playback()
    audio_factory.latest.finish()

    assert session.prompt.active is True
    assert session.prompt.seconds_remaining == 5

    _run_seconds(session, clock, 4)
    assert session.prompt.seconds_remaining == 1
    assert session.position == ReadingPosition("Al-Fatihah", 1)

    _run_seconds(session, clock, 1)
    assert session.prompt.active is False
    assert session.position == ReadingPosition("Al-Fatihah", 2)
    assert session.content is not None and session.content.text == "text 1:2"
    assert session.playback_state.is_playing is False

    _run_seconds(session, clock, 1)
    assert session.playback_state.resource_ref == "audio/1/001002.mp3"
    assert session.playback_state.is_playing is True
    assert "play" in audio_factory.latest.calls


def test_cancel_during_countdown_keeps_position(make_session, audio_factory, clock) -> None:
    """Cancelling with three seconds left should leave the position untouched."""

    session = make_session()
    session.start()
    session.toggle_playback()
    audio_factory.latest.finish()
    _run_seconds(session, clock, 2)
    assert session.prompt.seconds_remaining == 3

    assert session.cancel_auto_advance() is True
    _run_seconds(session, clock, 10)

    assert session.prompt.active is False
    assert session.position == ReadingPosition("Al-Fatihah", 1)
    assert session.cancel_auto_advance() is False


def test_confirm_advances_immediately(make_session, audio_factory) -> None:
    session = make_session("Al-Kahf", 10)
    session.start()
    audio_factory.latest.finish()

    assert session.confirm_auto_advance() is True
    assert session.position == ReadingPosition("Al-Kahf", 11)


def test_looping_narration_restarts_without_countdown(make_session, audio_factory) -> None:
    """Looping mode should replay the same verse and never offer auto-advance."""

    session = make_session(looping=True)
    session.start()
    session.toggle_playback()
    resource = audio_factory.latest

    resource.finish()

    assert session.prompt.active is False
    assert session.playback_state.is_playing is True
    assert session.playback_state.elapsed_seconds == 0.0
    assert resource.calls[-2:] == ["seek:0.0", "play"]
    assert session.position == ReadingPosition("Al-Fatihah", 1)


def test_stale_resolution_is_discarded(make_session, stub_fetcher, audio_factory) -> None:
    """An outcome for a superseded position must not overwrite newer content."""

    resolver = DeferredResolver(stub_fetcher)
    session = make_session(resolver=resolver)
    session.start()
    session.next_verse()
    assert len(resolver.pending) == 2
    assert session.is_loading is True

    resolver.release(1)
    resolver.release(0)

    assert session.content is not None
    assert session.content.position == ReadingPosition("Al-Fatihah", 2)
    assert [resource.ref for resource in audio_factory.created] == ["audio/1/001002.mp3"]
    assert session.is_loading is False


def test_invalid_verse_input_reports_notice_without_fetch(
    make_session, audio_factory, stub_fetcher
) -> None:
    """Unparseable or out-of-range verses should not touch content or playback."""

    session = make_session()
    session.start()
    session.toggle_playback()
    notices = _collect_notices(session)

    session.enter_verse("abc")
    session.enter_verse("8")

    assert [(notice.title, notice.message) for notice in notices] == [
        ("Invalid Input", "Please enter a valid verse number"),
        ("Invalid Input", "Please enter a valid verse number"),
    ]
    assert stub_fetcher.calls == [(1, 1, "en", 1)]
    assert session.playback_state.is_playing is True
    assert len(audio_factory.created) == 1


def test_resolution_failure_clears_content_and_audio(make_session, stub_fetcher) -> None:
    """A failed fetch should drop the displayed verse and its narration."""

    stub_fetcher.errors[(1, 2)] = ContentResolutionError(
        "Invalid verse number or API error (HTTP 404).",
        failure_kind="http_status",
        status_code=404,
    )
    session = make_session()
    session.start()
    changes: list[object] = []
    session.content_changes.subscribe(changes.append)
    notices = _collect_notices(session)

    session.next_verse()

    assert session.content is None
    assert session.playback.is_loaded is False
    assert changes == [None]
    assert notices == [
        Notice(level="error", title="Error", message="Invalid verse number or API error (HTTP 404).")
    ]


def test_manual_navigation_cancels_countdown(make_session, audio_factory, clock) -> None:
    """Moving during a countdown should cancel it without an extra advance."""

    session = make_session()
    session.start()
    audio_factory.latest.finish()
    assert session.prompt.active is True

    session.next_verse()
    _run_seconds(session, clock, 10)

    assert session.prompt.active is False
    assert session.position == ReadingPosition("Al-Fatihah", 2)


def test_navigation_crosses_chapter_boundaries(make_session) -> None:
    session = make_session("Al-Fatihah", 7)
    session.start()

    assert session.next_verse() is True
    assert session.position == ReadingPosition("Al-Baqarah", 1)
    assert session.previous_verse() is True
    assert session.position == ReadingPosition("Al-Fatihah", 7)

    session.reset()
    assert session.previous_verse() is False


def test_select_chapter_and_go_to(make_session, stub_fetcher) -> None:
    session = make_session()
    session.start()

    session.select_chapter("Maryam")
    session.go_to("Ya-Sin", 12)

    assert stub_fetcher.calls[-2:] == [(19, 1, "en", 1), (36, 12, "en", 1)]
    assert session.position == ReadingPosition("Ya-Sin", 12)


def test_go_to_normalizes_chapter_names(make_session, stub_fetcher) -> None:
    """Loosely typed names resolve to the catalog name; unknown names become the first chapter."""

    session = make_session()
    session.start()

    session.go_to("al-kahf", 3)
    assert session.position == ReadingPosition("Al-Kahf", 3)

    session.go_to("Atlantis", 2)
    assert session.position == ReadingPosition("Al-Fatihah", 2)
    assert stub_fetcher.calls[-2:] == [(18, 3, "en", 1), (1, 2, "en", 1)]


def test_unrecognized_start_chapter_still_allows_bookmarks(make_session) -> None:
    """Content shown for a fallback chapter should match the stored position."""

    session = make_session("al-kahf", 3)
    session.start()

    assert session.position == ReadingPosition("Al-Kahf", 3)
    assert session.content is not None
    assert session.content.position == session.position
    assert session.bookmark_current() is not None


def test_bookmark_current_is_idempotent(make_session, reader_config) -> None:
    """Bookmarking twice should add one entry and announce it once."""

    session = make_session("Al-Kahf", 10)
    session.start()
    notices = _collect_notices(session)

    first = session.bookmark_current()
    second = session.bookmark_current()

    assert first is not None and first.snippet_text == "text 18:10"
    assert second is None
    assert session.is_bookmarked() is True
    assert [notice.message for notice in notices] == [
        "Surah Al-Kahf, Verse 10 has been bookmarked."
    ]
    payload = json.loads((reader_config.data_dir / "bookmarks.json").read_text(encoding="utf-8"))
    assert [(item["surah"], item["verse"]) for item in payload] == [("Al-Kahf", 10)]


def test_bookmark_requires_resolved_content(make_session, stub_fetcher) -> None:
    session = make_session(resolver=DeferredResolver(stub_fetcher))
    session.start()

    assert session.bookmark_current() is None
    assert len(session.bookmarks) == 0


def test_resolved_position_is_saved_and_restored(
    make_session, reader_config, audio_factory, registry, clock
) -> None:
    """The last resolved position should be the default for the next session."""

    from versereader.session import ReadingSession

    session = make_session("Al-Mulk", 12)
    session.start()
    state = json.loads((reader_config.data_dir / "state.json").read_text(encoding="utf-8"))
    assert state == {"location": "?surah=Al-Mulk&verse=12"}
    session.close()

    restored = ReadingSession.from_config(
        reader_config, audio_factory, registry=registry, clock=clock
    )
    try:
        assert restored.position == ReadingPosition("Al-Mulk", 12)
    finally:
        restored.close()


def test_resume_waits_for_late_content(make_session, stub_fetcher, audio_factory, clock) -> None:
    """When the resume delay ends before content arrives, play as soon as it loads."""

    resolver = DeferredResolver(stub_fetcher)
    session = make_session(resolver=resolver)
    session.start()
    resolver.release_all()
    session.toggle_playback()
    audio_factory.latest.finish()

    session.confirm_auto_advance()
    _run_seconds(session, clock, 2)
    assert session.playback_state.is_playing is False

    resolver.release_all()

    assert audio_factory.latest.ref == "audio/1/001002.mp3"
    assert audio_factory.latest.calls == ["play"]
    assert session.playback_state.is_playing is True


def test_playback_error_is_reported_as_notice(make_session, audio_factory) -> None:
    audio_factory.failing_refs.add("audio/1/001001.mp3")
    session = make_session()
    notices = _collect_notices(session)

    session.start()

    assert session.content is not None
    assert session.playback.is_loaded is False
    assert [notice.title for notice in notices] == ["Playback Error"]


def test_end_of_catalog_reports_notice_and_stays(make_session, audio_factory, clock) -> None:
    """Auto-advance past the last verse should be a no-op with a notice."""

    session = make_session("An-Nas", 6)
    session.start()
    session.toggle_playback()
    notices = _collect_notices(session)
    audio_factory.latest.finish()

    _run_seconds(session, clock, 7)

    assert session.position == ReadingPosition("An-Nas", 6)
    assert [notice.title for notice in notices] == ["End Reached"]
    assert audio_factory.latest.calls.count("play") == 1


def test_language_and_reciter_changes_refetch(make_session, stub_fetcher, audio_factory) -> None:
    session = make_session()
    session.start()

    session.set_language("ur")
    session.set_reciter(3)
    session.set_reciter(3)

    assert stub_fetcher.calls == [(1, 1, "en", 1), (1, 1, "ur", 1), (1, 1, "ur", 3)]
    assert session.content is not None
    assert session.content.translation == "ur translation 1:1"
    assert audio_factory.latest.ref == "audio/3/001001.mp3"


def test_seek_is_clamped_to_track_duration(make_session, audio_factory) -> None:
    session = make_session()
    session.start()
    audio_factory.latest.emit_metadata(30.0)

    session.seek(45.0)
    assert session.playback_state.elapsed_seconds == 30.0

    session.seek(-5.0)
    assert session.playback_state.elapsed_seconds == 0.0
    assert audio_factory.latest.calls == ["seek:30.0", "seek:0.0"]


def test_superseded_narration_end_does_not_start_countdown(
    make_session, stub_fetcher, audio_factory, clock
) -> None:
    """Old narration finishing while the next verse loads must not auto-advance."""

    resolver = DeferredResolver(stub_fetcher)
    session = make_session(resolver=resolver)
    session.start()
    resolver.release_all()
    session.toggle_playback()
    old_resource = audio_factory.latest

    session.next_verse()
    old_resource.finish()

    assert session.prompt.active is False

    _run_seconds(session, clock, 6)
    resolver.release_all()

    assert session.position == ReadingPosition("Al-Fatihah", 2)
    assert audio_factory.latest.ref == "audio/1/001002.mp3"


def test_narration_end_after_reciter_change_is_ignored_until_reload(
    make_session, stub_fetcher, audio_factory
) -> None:
    resolver = DeferredResolver(stub_fetcher)
    session = make_session(resolver=resolver)
    session.start()
    resolver.release_all()
    session.toggle_playback()
    old_resource = audio_factory.latest

    session.set_reciter(2)
    old_resource.finish()
    assert session.prompt.active is False

    resolver.release_all()
    audio_factory.latest.finish()
    assert session.prompt.active is True


def test_prepared_narration_is_loaded_instead_of_remote_reference(
    make_session, stub_fetcher, audio_factory
) -> None:
    """Narration downloaded during resolution should be opened from its local path."""

    prepared: list[str] = []

    def _prepare(ref: str) -> str:
        prepared.append(ref)
        return f"/cache/{ref.rsplit('/', 1)[-1]}"

    session = make_session(resolver=InlineResolver(stub_fetcher, prepare_narration=_prepare))
    session.start()
    audio_factory.latest.finish()

    assert prepared == ["audio/1/001001.mp3"]
    assert audio_factory.latest.ref == "/cache/001001.mp3"
    assert session.prompt.active is True


def test_narration_preparation_failure_keeps_content(make_session, stub_fetcher) -> None:
    def _prepare(ref: str) -> str:
        raise PlaybackError(f"Narration could not be downloaded: {ref}")

    session = make_session(resolver=InlineResolver(stub_fetcher, prepare_narration=_prepare))
    notices = _collect_notices(session)
    session.start()

    assert session.content is not None
    assert session.playback.is_loaded is False
    assert [(notice.title, notice.message) for notice in notices] == [
        ("Playback Error", "Narration could not be downloaded: audio/1/001001.mp3")
    ]
