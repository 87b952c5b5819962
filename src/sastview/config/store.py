"""Persisted key-value state that survives between runs.

Only the repository base URL is stored, under :data:`REPO_KEY`. The file
lives at ``$SASTVIEW_STATE_FILE`` or ``~/.sastview/state.json``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

REPO_KEY = "repo"

STATE_ENV_VAR = "SASTVIEW_STATE_FILE"


class StoreError(Exception):
    """Raised when the state file cannot be written."""


def default_state_path() -> Path:
    override = os.environ.get(STATE_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".sastview" / "state.json"


class StateStore:
    """A tiny JSON-backed string store. A missing or corrupt file reads as empty."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or default_state_path()

    def _read(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write state file {self.path}: {exc}") from exc

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._read().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        if data.get(key) == value:
            return
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> bool:
        """Remove *key*. Returns False if it was not stored."""
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True
