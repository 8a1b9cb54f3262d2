"""Unit tests for named-slot JSON storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from versereader.io.storage import SlotStore


def test_slot_store_roundtrip_and_missing_slot(tmp_path: Path) -> None:
    store = SlotStore(tmp_path / "data")

    path = store.save_json("state", {"location": "?surah=Maryam&verse=1"})

    assert path == tmp_path / "data" / "state.json"
    assert store.load_json("state") == {"location": "?surah=Maryam&verse=1"}
    assert store.exists("state")
    assert store.load_json("missing") is None
    assert not (tmp_path / "data" / "state.json.tmp").exists()


def test_slot_store_reports_invalid_json(tmp_path: Path) -> None:
    store = SlotStore(tmp_path)
    (tmp_path / "broken.json").write_text("[1,", encoding="utf-8")

    with pytest.raises(ValueError, match="Slot `broken` is not valid JSON"):
        store.load_json("broken")
