"""Tool registration for the compact-slack MCP server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastmcp import Context, FastMCP

from ..session import NotificationSession


@dataclass(slots=True)
class ToolHandles:
    configure_slack: Any
    send_compact_prompt: Any
    add_task: Any
    complete_task: Any
    set_current_task: Any
    send_progress: Any
    get_progress: Any
    reset_progress: Any
    session: NotificationSession


def register_tools(server: FastMCP, *, session: NotificationSession) -> ToolHandles:
    """Register the Slack notification tools on the server."""

    def _configure_slack(
        webhook_url: str | None = None,
        session_id: str | None = None,
        enable_progress: bool | None = None,
        enable_compact_prompts: bool | None = None,
        context: Context | None = None,
    ) -> dict[str, Any]:
        """Configure the webhook URL, session id and notification toggles."""

        result = session.configure(
            webhook_url=webhook_url,
            session_id=session_id,
            enable_progress=enable_progress,
            enable_compact_prompts=enable_compact_prompts,
        )
        _emit_log(
            context,
            "info",
            "Slack configuration updated",
            extra={"session_id": result["session_id"], "target": result["webhook"]},
        )
        return result

    async def _send_compact_prompt(
        prompt: str,
        session_id: str | None = None,
        context: Context | None = None,
    ) -> dict[str, Any]:
        """Normalize a prompt and post it to Slack."""

        result = await session.send_prompt(prompt, session_id=session_id)
        _emit_log(
            context,
            "info" if result["sent"] else "debug",
            "Compact prompt sent" if result["sent"] else "Compact prompt skipped",
            extra={"messages": result.get("messages", 0), "summary": result["summary"][:100]},
        )
        return result

    tool_configure = server.tool(
        name="configure_slack",
        description=(
            "Configure the Slack webhook URL and settings. The webhook URL is optional "
            "when SLACK_WEBHOOK_URL is already set."
        ),
    )(_configure_slack)

    tool_send_prompt = server.tool(
        name="send_compact_prompt",
        description="Send a compact formatted prompt to Slack.",
    )(_send_compact_prompt)

    def _add_task(task_id: str, task_name: str, context: Context | None = None) -> dict[str, Any]:
        session.add_task(task_id, task_name)
        _emit_log(context, "debug", "Task added", extra={"task_id": task_id})
        return {"task_id": task_id, "task_name": task_name}

    async def _complete_task(task_id: str, context: Context | None = None) -> dict[str, Any]:
        result = await session.complete_task(task_id)
        _emit_log(
            context,
            "info" if result["matched"] else "warning",
            "Task completed" if result["matched"] else "Completed unknown task id",
            extra=result,
        )
        return result

    def _set_current_task(task_name: str, context: Context | None = None) -> dict[str, Any]:
        session.set_current_task(task_name)
        _emit_log(context, "debug", "Current task set", extra={"task_name": task_name})
        return {"current_task": task_name}

    tool_add_task = server.tool(
        name="add_task",
        description="Add a task to the progress tracker. Re-using an id replaces that task.",
    )(_add_task)

    tool_complete_task = server.tool(
        name="complete_task",
        description="Mark a task as completed and post a progress update when enabled.",
    )(_complete_task)

    tool_set_current = server.tool(
        name="set_current_task",
        description="Set the label of the currently active task.",
    )(_set_current_task)

    async def _send_progress(context: Context | None = None) -> dict[str, Any]:
        result = await session.send_progress()
        _emit_log(context, "info", "Progress update processed", extra=result)
        return result

    def _get_progress(context: Context | None = None) -> dict[str, Any]:
        progress = session.get_progress()
        _emit_log(
            context,
            "debug",
            "Progress requested",
            extra={"completed": progress["completed"], "total": progress["total"]},
        )
        return progress

    def _reset_progress(context: Context | None = None) -> dict[str, Any]:
        session.reset_progress()
        _emit_log(context, "info", "Progress reset", extra={"session_id": session.tracker.session_id})
        return {"reset": True, "session_id": session.tracker.session_id}

    tool_send_progress = server.tool(
        name="send_progress",
        description="Send the current task progress to Slack.",
    )(_send_progress)

    tool_get_progress = server.tool(
        name="get_progress",
        description="Return current task progress, completion rate and the task list.",
    )(_get_progress)

    tool_reset = server.tool(
        name="reset_progress",
        description="Clear all tracked tasks and the current task label.",
    )(_reset_progress)

    return ToolHandles(
        configure_slack=tool_configure,
        send_compact_prompt=tool_send_prompt,
        add_task=tool_add_task,
        complete_task=tool_complete_task,
        set_current_task=tool_set_current,
        send_progress=tool_send_progress,
        get_progress=tool_get_progress,
        reset_progress=tool_reset,
        session=session,
    )


__all__ = ["register_tools", "ToolHandles"]

logger = logging.getLogger(__name__)


def _emit_log(
    context: Context | None,
    level: str,
    message: str,
    *,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log through the MCP request context when it exposes a logger, else the module logger."""

    payload = extra or {}

    if context is not None:
        ctx_logger = getattr(context, "logger", None)
        if ctx_logger is not None:
            log_method = getattr(ctx_logger, level, None)
            if callable(log_method):
                log_method(message, extra=payload)
                return

    fallback = getattr(logger, level, logger.info)
    fallback(message, extra=payload)
