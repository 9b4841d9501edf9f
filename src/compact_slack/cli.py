"""Command line interface for compact-slack."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Callable

from pydantic import ValidationError

from .config import SlackSettings, config_home, save_global_config
from .progress import TrackerStateError, TrackerStateStore
from .server import configure_logging
from .session import NotificationSession
from .slack import NotificationError, SlackNotifier
from .text import summarize


def state_store() -> TrackerStateStore:
    return TrackerStateStore(config_home() / "state.json")


def load_session(settings: SlackSettings, store: TrackerStateStore) -> NotificationSession:
    """Build a session whose tracker is restored from the CLI state file."""

    tracker = store.load(settings.session_id)
    return NotificationSession(settings, tracker=tracker, notifier_factory=SlackNotifier)


def cmd_configure(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    result = session.configure(
        webhook_url=args.webhook_url,
        session_id=args.session_id,
        enable_progress=args.progress,
        enable_compact_prompts=args.compact_prompts,
    )
    save_global_config(
        {
            "webhookUrl": session.settings.webhook_url,
            "sessionId": args.session_id,
            "enableProgress": args.progress,
            "enableCompactPrompts": args.compact_prompts,
        }
    )
    store.save(session.tracker)
    print(f"Slack configured successfully ({result['webhook']}, session {result['session_id']})")


def cmd_send_prompt(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    result = asyncio.run(session.send_prompt(args.prompt, session_id=args.session_id))
    if result["sent"]:
        print(f"Prompt sent to Slack ({result['messages']} message(s))")
    else:
        print(result["reason"])


def cmd_add_task(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    session.add_task(args.task_id, args.task_name)
    store.save(session.tracker)
    print(f"Task added: {args.task_name}")


def cmd_complete_task(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    try:
        result = asyncio.run(session.complete_task(args.task_id))
    finally:
        store.save(session.tracker)
    if result["progress_sent"]:
        print("Task completed and progress sent to Slack")
    else:
        print("Task completed (Slack progress not sent)")


def cmd_set_current_task(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    session.set_current_task(args.task_name)
    store.save(session.tracker)
    print(f"Current task set: {args.task_name}")


def cmd_send_progress(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    result = asyncio.run(session.send_progress())
    if result["sent"]:
        print(f"Progress sent to Slack: {result['completed']}/{result['total']} tasks completed")
    else:
        print(result["reason"])


def cmd_get_progress(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    progress = session.get_progress()
    if args.json:
        print(json.dumps(progress, indent=2))
        return
    print("📊 Current Progress:")
    print(f"Current Task: {progress['current'] or 'None'}")
    print(f"Completed: {progress['completed']}/{progress['total']}")
    print(f"Completion Rate: {progress['completion_rate']:.1f}%")
    if progress["tasks"]:
        print("\nTasks:")
        for task in progress["tasks"]:
            status = "✅" if task["completed"] else "⏳"
            print(f"  {status} {task['name']}")


def cmd_reset_progress(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    session.reset_progress()
    store.save(session.tracker)
    print("Progress reset")


def cmd_summarize(args: argparse.Namespace, session: NotificationSession, store: TrackerStateStore) -> None:
    print(summarize(args.prompt))


Command = Callable[[argparse.Namespace, NotificationSession, TrackerStateStore], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compact-slack",
        description="Send compact assistant prompts and task progress to Slack.",
        epilog="Environment: SLACK_WEBHOOK_URL, SESSION_ID, ENABLE_PROGRESS, ENABLE_COMPACT_PROMPTS",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    configure = subparsers.add_parser("configure", help="Store the Slack webhook and defaults")
    configure.add_argument("--webhook-url", default=None, help="Slack incoming webhook URL")
    configure.add_argument("--session-id", default=None, help="Session identifier")
    configure.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable progress notifications",
    )
    configure.add_argument(
        "--compact-prompts",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable compact prompt notifications",
    )
    configure.set_defaults(handler=cmd_configure)

    send_prompt = subparsers.add_parser("send-prompt", help="Send a formatted prompt to Slack")
    send_prompt.add_argument("prompt")
    send_prompt.add_argument("--session-id", default=None)
    send_prompt.set_defaults(handler=cmd_send_prompt)

    add_task = subparsers.add_parser("add-task", help="Add a task to the tracker")
    add_task.add_argument("task_id")
    add_task.add_argument("task_name")
    add_task.set_defaults(handler=cmd_add_task)

    complete_task = subparsers.add_parser("complete-task", help="Complete a task")
    complete_task.add_argument("task_id")
    complete_task.set_defaults(handler=cmd_complete_task)

    current = subparsers.add_parser("set-current-task", help="Set the current task label")
    current.add_argument("task_name")
    current.set_defaults(handler=cmd_set_current_task)

    send_progress = subparsers.add_parser("send-progress", help="Send progress to Slack")
    send_progress.set_defaults(handler=cmd_send_progress)

    get_progress = subparsers.add_parser("get-progress", help="Show current progress")
    get_progress.add_argument("--json", action="store_true", help="Print progress as JSON")
    get_progress.set_defaults(handler=cmd_get_progress)

    reset = subparsers.add_parser("reset-progress", help="Reset all progress")
    reset.set_defaults(handler=cmd_reset_progress)

    summary = subparsers.add_parser("summarize", help="Print the compact summary of a prompt")
    summary.add_argument("prompt")
    summary.set_defaults(handler=cmd_summarize)

    return parser


def run(args: argparse.Namespace) -> int:
    handler: Command = args.handler
    try:
        settings = SlackSettings()
        configure_logging(settings.log_level)
        store = state_store()
        session = load_session(settings, store)
        handler(args, session, store)
    except (NotificationError, TrackerStateError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = run(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
