from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

import pytest

from compact_slack.config import get_settings

_SETTINGS_ENV = (
    "SLACK_WEBHOOK_URL",
    "SESSION_ID",
    "ENABLE_PROGRESS",
    "ENABLE_COMPACT_PROMPTS",
    "COMPACT_SLACK_LOG_LEVEL",
    "COMPACT_SLACK_TIMEOUT",
)

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/secret"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    monkeypatch.setenv("COMPACT_SLACK_HOME", str(home))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield home
    get_settings.cache_clear()


class StubNotifier:
    """Records sends instead of posting to Slack."""

    instances: list["StubNotifier"] = []

    def __init__(self, webhook_url: str, *, timeout: float = 10.0) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.prompts: list[Any] = []
        self.progress: list[Any] = []
        StubNotifier.instances.append(self)

    async def send_compact_prompt(self, data: Any) -> int:
        self.prompts.append(data)
        return 1

    async def send_progress(self, snapshot: Any) -> None:
        self.progress.append(snapshot)


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL


@pytest.fixture
def stub_notifier() -> type[StubNotifier]:
    StubNotifier.instances = []
    return StubNotifier
