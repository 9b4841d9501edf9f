"""Value types produced by the task tracker."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Task:
    name: str
    completed: bool = False


@dataclass(frozen=True, slots=True)
class TaskRecord:
    id: str
    name: str
    completed: bool


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Point-in-time copy of tracker state; later tracker changes are not reflected."""

    current_task: str
    completed_tasks: tuple[str, ...] = field(default_factory=tuple)
    total_tasks: int = 0
    timestamp: str = ""
    session_id: str | None = None

    @property
    def completed_count(self) -> int:
        return len(self.completed_tasks)

    @property
    def completion_rate(self) -> float:
        if self.total_tasks <= 0:
            return 0.0
        return self.completed_count / self.total_tasks * 100


__all__ = ["ProgressSnapshot", "Task", "TaskRecord"]
