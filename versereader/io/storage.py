"""Named-slot JSON storage.

Responsibilities:
- Persist whole JSON documents under named slots in one data directory.
- Treat missing or unreadable slots as absent rather than fatal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class SlotStore:
    """Filesystem-backed store with one JSON file per slot."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root data directory."""

        self.root = root

    def path_for(self, slot: str) -> Path:
        return self.root / f"{slot}.json"

    def save_json(self, slot: str, payload: Any) -> Path:
        """Serialize the payload to the slot atomically and return its path."""

        path = self.path_for(slot)
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".json.tmp")
        temp_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        temp_path.replace(path)
        return path

    def load_json(self, slot: str) -> Any | None:
        """Load a slot payload.

        Returns:
            Parsed JSON, or `None` when the slot is missing.

        Raises:
            ValueError: If the slot exists but is not valid JSON or UTF-8.
        """

        path = self.path_for(slot)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise ValueError(f"Slot `{slot}` is not valid UTF-8.") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"Slot `{slot}` is not valid JSON: {exc.msg}.") from exc

    def exists(self, slot: str) -> bool:
        """Return whether the given slot exists."""

        return self.path_for(slot).exists()
