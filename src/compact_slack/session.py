"""Per-session adapter that wires settings, tracker and notifier together."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from .config import SlackSettings
from .progress import TaskTracker
from .slack import CompactPromptData, ConfigurationError, SlackNotifier, mask_webhook_url
from .text import normalize, summarize

logger = logging.getLogger(__name__)

NotifierFactory = Callable[..., SlackNotifier]


class NotificationSession:
    """Owns one tracker and one notifier for a single assistant session.

    Feature toggles are enforced here; the tracker and notifier know nothing
    about them.
    """

    def __init__(
        self,
        settings: SlackSettings,
        *,
        tracker: TaskTracker | None = None,
        notifier_factory: NotifierFactory = SlackNotifier,
    ) -> None:
        self._settings = settings
        self._notifier_factory = notifier_factory
        self.tracker = tracker or TaskTracker(settings.session_id)
        self._notifier: SlackNotifier | None = None
        if settings.webhook_url:
            self._notifier = self._build_notifier(settings.webhook_url)

    @property
    def settings(self) -> SlackSettings:
        return self._settings

    @property
    def is_configured(self) -> bool:
        return self._notifier is not None

    def _build_notifier(self, webhook_url: str) -> SlackNotifier:
        return self._notifier_factory(webhook_url, timeout=self._settings.request_timeout)

    def _require_notifier(self) -> SlackNotifier:
        if self._notifier is None:
            raise ConfigurationError(
                "Slack not configured. Provide a webhook URL via configure or SLACK_WEBHOOK_URL."
            )
        return self._notifier

    def configure(
        self,
        webhook_url: str | None = None,
        session_id: str | None = None,
        enable_progress: bool | None = None,
        enable_compact_prompts: bool | None = None,
    ) -> dict[str, Any]:
        """Update the webhook target and toggles; a new session id starts a fresh tracker."""

        effective_url = (webhook_url or "").strip() or self._settings.webhook_url
        if not effective_url:
            raise ConfigurationError(
                "Slack webhook URL must be provided either as a parameter or via SLACK_WEBHOOK_URL"
            )
        updated = SlackSettings.model_validate(
            {
                "SLACK_WEBHOOK_URL": effective_url,
                "SESSION_ID": session_id or self._settings.session_id,
                "ENABLE_PROGRESS": (
                    self._settings.enable_progress if enable_progress is None else enable_progress
                ),
                "ENABLE_COMPACT_PROMPTS": (
                    self._settings.enable_compact_prompts
                    if enable_compact_prompts is None
                    else enable_compact_prompts
                ),
                "COMPACT_SLACK_LOG_LEVEL": self._settings.log_level,
                "COMPACT_SLACK_TIMEOUT": self._settings.request_timeout,
            }
        )
        self._settings = updated
        self._notifier = self._build_notifier(effective_url)
        if session_id and session_id != self.tracker.session_id:
            self.tracker = TaskTracker(session_id)

        logger.info(
            "Slack configured",
            extra={"target": mask_webhook_url(effective_url), "session_id": self.tracker.session_id},
        )
        return {
            "webhook": mask_webhook_url(effective_url),
            "session_id": self.tracker.session_id,
            "enable_progress": updated.enable_progress,
            "enable_compact_prompts": updated.enable_compact_prompts,
        }

    async def send_prompt(self, prompt: str, session_id: str | None = None) -> dict[str, Any]:
        notifier = self._require_notifier()
        summary = summarize(prompt)
        if not self._settings.enable_compact_prompts:
            return {"sent": False, "reason": "Compact prompts are disabled", "summary": summary}

        data = CompactPromptData(
            prompt=normalize(prompt),
            timestamp=datetime.now(timezone.utc).isoformat(),
            session_id=session_id or self.tracker.session_id,
        )
        messages = await notifier.send_compact_prompt(data)
        return {"sent": True, "messages": messages, "summary": summary}

    def add_task(self, task_id: str, task_name: str) -> None:
        self.tracker.add_task(task_id, task_name)

    async def complete_task(self, task_id: str) -> dict[str, Any]:
        """Complete a task and push a progress update when progress notifications are on."""

        matched = self.tracker.complete_task(task_id)
        progress_sent = False
        if self._notifier is not None and self._settings.enable_progress:
            await self._notifier.send_progress(self.tracker.get_current_progress())
            progress_sent = True
        return {"task_id": task_id, "matched": matched, "progress_sent": progress_sent}

    def set_current_task(self, name: str) -> None:
        self.tracker.set_current_task(name)

    async def send_progress(self) -> dict[str, Any]:
        notifier = self._require_notifier()
        if not self._settings.enable_progress:
            return {"sent": False, "reason": "Progress tracking is disabled"}
        snapshot = self.tracker.get_current_progress()
        await notifier.send_progress(snapshot)
        return {
            "sent": True,
            "completed": snapshot.completed_count,
            "total": snapshot.total_tasks,
        }

    def get_progress(self) -> dict[str, Any]:
        snapshot = self.tracker.get_current_progress()
        return {
            "session_id": snapshot.session_id,
            "current": snapshot.current_task,
            "completed": snapshot.completed_count,
            "total": snapshot.total_tasks,
            "completion_rate": self.tracker.get_completion_rate(),
            "tasks": [
                {"id": task.id, "name": task.name, "completed": task.completed}
                for task in self.tracker.get_tasks()
            ],
        }

    def reset_progress(self) -> None:
        self.tracker.reset()


__all__ = ["NotificationSession"]
