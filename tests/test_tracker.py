from __future__ import annotations

import dataclasses
import json
import re
from pathlib import Path

import pytest

from compact_slack.progress import (
    TaskTracker,
    TrackerStateError,
    TrackerStateStore,
    generate_session_id,
)


def test_progress_scenario() -> None:
    tracker = TaskTracker("sess-1")
    tracker.add_task("t1", "Write tests")
    tracker.add_task("t2", "Fix bug")
    tracker.complete_task("t1")

    snapshot = tracker.get_current_progress()

    assert snapshot.completed_tasks == ("Write tests",)
    assert snapshot.total_tasks == 2
    assert snapshot.session_id == "sess-1"
    assert tracker.get_completion_rate() == 50.0


def test_empty_tracker_rate_is_zero() -> None:
    tracker = TaskTracker()
    assert tracker.get_completion_rate() == 0.0
    assert tracker.get_current_progress().completion_rate == 0.0


def test_rate_stays_within_bounds() -> None:
    tracker = TaskTracker()
    for index in range(3):
        tracker.add_task(f"t{index}", f"Task {index}")
        tracker.complete_task(f"t{index}")
        assert 0 <= tracker.get_completion_rate() <= 100
    assert tracker.get_completion_rate() == 100.0


def test_complete_unknown_task_is_noop() -> None:
    tracker = TaskTracker()
    tracker.add_task("t1", "Write tests")

    assert tracker.complete_task("missing-id") is False
    assert [task.completed for task in tracker.get_tasks()] == [False]


def test_readding_task_overwrites_in_place() -> None:
    tracker = TaskTracker()
    tracker.add_task("a", "First")
    tracker.add_task("b", "Second")
    tracker.complete_task("a")
    tracker.add_task("a", "First again")

    tasks = tracker.get_tasks()

    assert [task.id for task in tasks] == ["a", "b"]
    assert tasks[0].name == "First again"
    assert tasks[0].completed is False


def test_reset_clears_tasks_but_keeps_session() -> None:
    tracker = TaskTracker("keep-me")
    tracker.add_task("t1", "Write tests")
    tracker.set_current_task("Writing tests")
    tracker.reset()

    assert tracker.get_tasks() == []
    assert tracker.get_completion_rate() == 0.0
    assert tracker.current_task == ""
    assert tracker.session_id == "keep-me"


def test_current_task_is_free_text() -> None:
    tracker = TaskTracker()
    tracker.set_current_task("Reviewing the diff")
    assert tracker.get_current_progress().current_task == "Reviewing the diff"


def test_snapshot_does_not_observe_later_changes() -> None:
    tracker = TaskTracker()
    tracker.add_task("t1", "Write tests")
    snapshot = tracker.get_current_progress()

    tracker.complete_task("t1")
    tracker.add_task("t2", "Fix bug")

    assert snapshot.completed_tasks == ()
    assert snapshot.total_tasks == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.total_tasks = 5  # type: ignore[misc]


def test_generated_session_ids_are_unique() -> None:
    first = generate_session_id()
    second = TaskTracker().session_id

    assert re.fullmatch(r"session_\d+_[0-9a-f]{9}", first)
    assert first != second


def test_state_store_round_trip(tmp_path: Path) -> None:
    store = TrackerStateStore(tmp_path / "state.json")
    tracker = TaskTracker("sess-9")
    tracker.add_task("t1", "Write tests")
    tracker.add_task("t2", "Fix bug")
    tracker.complete_task("t2")
    tracker.set_current_task("Fixing bug")
    store.save(tracker)

    restored = store.load()

    assert restored.session_id == "sess-9"
    assert restored.current_task == "Fixing bug"
    assert restored.get_tasks() == tracker.get_tasks()


def test_state_store_starts_fresh_when_missing_or_session_changes(tmp_path: Path) -> None:
    store = TrackerStateStore(tmp_path / "state.json")
    assert store.load("sess-1").session_id == "sess-1"

    tracker = TaskTracker("sess-1")
    tracker.add_task("t1", "Write tests")
    store.save(tracker)

    other = store.load("sess-2")
    assert other.session_id == "sess-2"
    assert other.get_tasks() == []


def test_state_store_reports_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"tasks": [{"name": "no id"}]}), encoding="utf-8")

    with pytest.raises(TrackerStateError):
        TrackerStateStore(path).load()
