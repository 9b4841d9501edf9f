"""FastMCP server bootstrap for compact-slack."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastmcp import Context, FastMCP

from . import __version__
from .config import SlackSettings, get_settings
from .session import NotificationSession
from .slack import mask_webhook_url
from .tools import register_tools


def configure_logging(level: str) -> None:
    """Configure root logging for the compact-slack processes."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def build_status(session: NotificationSession) -> dict[str, Any]:
    """Summarize configuration and tracker state without exposing the webhook secret."""

    settings = session.settings
    progress = session.get_progress()
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "server_version": __version__,
        "log_level": settings.log_level,
        "slack": {
            "configured": session.is_configured,
            "webhook": mask_webhook_url(settings.webhook_url) if settings.webhook_url else None,
            "enable_progress": settings.enable_progress,
            "enable_compact_prompts": settings.enable_compact_prompts,
        },
        "progress": {
            "session_id": progress["session_id"],
            "current": progress["current"],
            "completed": progress["completed"],
            "total": progress["total"],
            "completion_rate": progress["completion_rate"],
        },
    }


def create_server(
    settings: Optional[SlackSettings] = None,
    session: NotificationSession | None = None,
) -> FastMCP:
    """Instantiate the FastMCP server with the notification tools."""

    settings = settings or get_settings()
    session = session or NotificationSession(settings)

    server = FastMCP(
        name="Compact Send Slack",
        version=__version__,
        instructions=(
            "Posts compact summaries of assistant activity and task checklist progress "
            "to a Slack channel. Configure a webhook, register tasks, and send prompts or "
            "progress updates with the provided tools."
        ),
    )

    handles = register_tools(server, session=session)

    @server.resource(
        "resource://compact-slack/status",
        name="compact_slack_status",
        description="Current Slack configuration and task progress for this server.",
        mime_type="application/json",
    )
    def status_resource(context: Context) -> str:
        payload = build_status(session)
        payload["request_id"] = getattr(context, "request_id", None)
        return json.dumps(payload)

    setattr(server, "session", session)
    setattr(server, "tool_handles", handles)
    return server


def main() -> None:
    """Entry point for running the compact-slack MCP server over stdio."""

    settings = get_settings()
    configure_logging(settings.log_level)

    server = create_server(settings)
    logging.getLogger(__name__).info(
        "Launching compact-slack MCP server",
        extra={
            "version": __version__,
            "log_level": settings.log_level,
            "slack_configured": getattr(server, "session").is_configured,
        },
    )
    server.run()


if __name__ == "__main__":
    main()
