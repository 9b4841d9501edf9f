"""JSON persistence for tracker state between command line invocations."""

from __future__ import annotations

import json
from pathlib import Path

from .tracker import TaskTracker


class TrackerStateError(RuntimeError):
    """Raised when a persisted tracker state file cannot be parsed."""


class TrackerStateStore:
    """Loads and saves a single tracker snapshot at ``path``."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, session_id: str | None = None) -> TaskTracker:
        """Restore the stored tracker, or start a fresh one when nothing is stored.

        A ``session_id`` that differs from the stored one starts a fresh tracker.
        """

        if not self._path.exists():
            return TaskTracker(session_id)
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
            tracker = TaskTracker.from_state(document)
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
            raise TrackerStateError(f"Failed to parse tracker state in {self._path}: {exc}") from exc
        if session_id and tracker.session_id != session_id:
            return TaskTracker(session_id)
        return tracker

    def save(self, tracker: TaskTracker) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(tracker.export_state(), indent=2), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


__all__ = ["TrackerStateError", "TrackerStateStore"]
