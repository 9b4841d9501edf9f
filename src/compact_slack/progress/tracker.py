"""In-memory checklist of tasks for a single assistant session."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import uuid4

from .models import ProgressSnapshot, Task, TaskRecord


def generate_session_id() -> str:
    millis = time.time_ns() // 1_000_000
    return f"session_{millis}_{uuid4().hex[:9]}"


class TaskTracker:
    """Tracks tasks by id, a free-text current task label, and a session id.

    Tasks enumerate in insertion order. Re-adding an id replaces its record
    but keeps its position. The current task label is not tied to any task id.
    """

    def __init__(self, session_id: str | None = None) -> None:
        self._session_id = session_id or generate_session_id()
        self._tasks: dict[str, Task] = {}
        self._current_task = ""
        self._lock = threading.RLock()

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def current_task(self) -> str:
        return self._current_task

    def add_task(self, task_id: str, name: str) -> None:
        with self._lock:
            self._tasks[task_id] = Task(name=name)

    def complete_task(self, task_id: str) -> bool:
        """Mark a task completed. Unknown ids are ignored; returns whether one matched."""

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return False
            task.completed = True
            return True

    def set_current_task(self, name: str) -> None:
        with self._lock:
            self._current_task = name

    def get_current_progress(self) -> ProgressSnapshot:
        with self._lock:
            completed = tuple(task.name for task in self._tasks.values() if task.completed)
            return ProgressSnapshot(
                current_task=self._current_task,
                completed_tasks=completed,
                total_tasks=len(self._tasks),
                timestamp=datetime.now(timezone.utc).isoformat(),
                session_id=self._session_id,
            )

    def get_tasks(self) -> list[TaskRecord]:
        with self._lock:
            return [
                TaskRecord(id=task_id, name=task.name, completed=task.completed)
                for task_id, task in self._tasks.items()
            ]

    def get_completion_rate(self) -> float:
        with self._lock:
            total = len(self._tasks)
            if total == 0:
                return 0.0
            completed = sum(1 for task in self._tasks.values() if task.completed)
            return completed / total * 100

    def reset(self) -> None:
        """Drop all tasks and the current task label. The session id is kept."""

        with self._lock:
            self._tasks.clear()
            self._current_task = ""

    def export_state(self) -> dict[str, Any]:
        with self._lock:
            return {
                "session_id": self._session_id,
                "current_task": self._current_task,
                "tasks": [
                    {"id": task_id, "name": task.name, "completed": task.completed}
                    for task_id, task in self._tasks.items()
                ],
            }

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> "TaskTracker":
        tracker = cls(state.get("session_id") or None)
        tracker._current_task = str(state.get("current_task") or "")
        for item in state.get("tasks") or []:
            tracker._tasks[str(item["id"])] = Task(
                name=str(item.get("name", "")),
                completed=bool(item.get("completed", False)),
            )
        return tracker


__all__ = ["TaskTracker", "generate_session_id"]
