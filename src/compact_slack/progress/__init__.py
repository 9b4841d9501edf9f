"""Task tracking and progress snapshots."""

from .models import ProgressSnapshot, TaskRecord
from .store import TrackerStateError, TrackerStateStore
from .tracker import TaskTracker, generate_session_id

__all__ = [
    "ProgressSnapshot",
    "TaskRecord",
    "TaskTracker",
    "TrackerStateError",
    "TrackerStateStore",
    "generate_session_id",
]
