#!/usr/bin/env python3
"""Daily Dashboard CLI."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from daily_dashboard.analysis import TaskQuery, query_tasks, summarize, top_priorities
from daily_dashboard.assistant import AssistantResponder
from daily_dashboard.config import ConfigError, Settings, load_settings
from daily_dashboard.errors import ValidationError
from daily_dashboard.logs import configure_logging
from daily_dashboard.note_store import NoteStore
from daily_dashboard.notes import demo_notes
from daily_dashboard.task_store import TaskCreate, TaskStore
from daily_dashboard.tasks import demo_tasks, format_task_rows

DEFAULT_USER = "local@example.com"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daily-dashboard",
        description="Query tasks, print the dashboard summary and ask the assistant.",
    )
    parser.add_argument(
        "--user",
        default=DEFAULT_USER,
        help="Whose data to use (an email address).",
    )
    parser.add_argument(
        "--data-dir",
        help="JSONL data directory (overrides DASH_DATA_DIR).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="List one page of tasks matching the filters.",
    )
    list_parser.add_argument("--q", help="Search title and description.")
    list_parser.add_argument("--status", help="todo | in_progress | done")
    list_parser.add_argument("--priority", help="low | medium | high")
    list_parser.add_argument("--tag", help="Only tasks carrying this tag.")
    list_parser.add_argument(
        "--sort",
        default="created_at",
        help="created_at or end_date.",
    )
    list_parser.add_argument("--order", default="desc", help="asc or desc.")
    list_parser.add_argument("--page", default="1")
    list_parser.add_argument("--limit", default="10")

    subparsers.add_parser(
        "summary",
        help="Show dashboard counts and the top priorities.",
    )

    ask_parser = subparsers.add_parser(
        "ask",
        help="Send a message to the assistant.",
    )
    ask_parser.add_argument("message", nargs="+", help="Message text.")

    add_parser = subparsers.add_parser("add", help="Create a task.")
    add_parser.add_argument("title")
    add_parser.add_argument("--description")
    add_parser.add_argument("--status")
    add_parser.add_argument("--priority")
    add_parser.add_argument("--start", help="YYYY-MM-DD")
    add_parser.add_argument("--end", help="YYYY-MM-DD")
    add_parser.add_argument("--due", help="Single-day shorthand, YYYY-MM-DD.")
    add_parser.add_argument("--tag", action="append", dest="tags", help="Repeatable.")

    return parser


def _build_stores(settings: Settings) -> tuple[TaskStore, NoteStore]:
    return (
        TaskStore(settings.data_dir, seed=demo_tasks if settings.seed_demo_data else None),
        NoteStore(settings.data_dir, seed=demo_notes if settings.seed_demo_data else None),
    )


def _cmd_list(store: TaskStore, user: str, args: argparse.Namespace) -> int:
    query = TaskQuery.from_params({
        "q": args.q,
        "status": args.status,
        "priority": args.priority,
        "tag": args.tag,
        "sort": args.sort,
        "order": args.order,
        "page": args.page,
        "limit": args.limit,
    })
    tasks = query_tasks(store.list_tasks(user), query)
    if not tasks:
        print("No tasks match.")
        return 0
    print(format_task_rows(tasks))
    print(f"\nPage {query.page} | {len(tasks)} shown | sort {query.sort.value} {query.order.value}")
    return 0


def _cmd_summary(store: TaskStore, user: str) -> int:
    tasks = store.list_tasks(user)
    summary = summarize(tasks)
    print(f"Total: {summary.total_tasks}")
    print(f"Due today: {summary.due_today}")
    print(f"Overdue: {summary.overdue}")
    print(f"Done this week: {summary.done_this_week}")

    top = top_priorities(tasks)
    print("\nTop priorities:")
    if not top:
        print("  none")
    for idx, task in enumerate(top, 1):
        print(f"  {idx}. {task.title} ({task.priority.value}, {task.status.value})")
    return 0


def _cmd_ask(assistant: AssistantResponder, user: str, message: str) -> int:
    result = assistant.reply(user, message)
    print(result.reply)
    return 0


def _cmd_add(store: TaskStore, user: str, args: argparse.Namespace) -> int:
    request = TaskCreate(
        title=args.title,
        description=args.description,
        status=args.status,
        priority=args.priority,
        start_date=args.start,
        end_date=args.end,
        due_date=args.due,
        tags=args.tags,
    )
    try:
        task = store.create_task(user, request)
    except ValidationError as exc:
        print(f"Add failed: {exc}", file=sys.stderr)
        return 1
    print(f"Created {task.id}: {task.title}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    if args.data_dir:
        settings.data_dir = Path(args.data_dir)
    configure_logging(settings.log_level)

    task_store, note_store = _build_stores(settings)
    user = args.user.strip().lower()

    if args.command == "list":
        return _cmd_list(task_store, user, args)
    if args.command == "summary":
        return _cmd_summary(task_store, user)
    if args.command == "ask":
        assistant = AssistantResponder(task_store, note_store)
        return _cmd_ask(assistant, user, " ".join(args.message))
    if args.command == "add":
        return _cmd_add(task_store, user, args)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
