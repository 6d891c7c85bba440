"""Dashboard aggregates derived from a user's task collection."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..tasks import Task, TaskStatus

RECENT_TASKS_LIMIT = 10
DONE_WINDOW = timedelta(days=7)


@dataclass(slots=True)
class DashboardSummary:
    """Counts and the recently-updated list shown on the dashboard."""

    total_tasks: int
    due_today: int
    overdue: int
    done_this_week: int
    recent_tasks: List[Task] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_tasks": self.total_tasks,
            "due_today": self.due_today,
            "overdue": self.overdue,
            "done_this_week": self.done_this_week,
            "recent_tasks": [task.to_dict() for task in self.recent_tasks],
        }


def is_due_on(task: Task, day: date) -> bool:
    """True when the task's effective date range contains ``day``."""
    start, end = task.effective_range()
    if start is None or end is None:
        return False
    return start <= day <= end


def is_overdue(task: Task, day: date) -> bool:
    """True for unfinished tasks whose effective end is before ``day``."""
    if task.status == TaskStatus.DONE:
        return False
    _, end = task.effective_range()
    return end is not None and end < day


def tasks_due_on(tasks: Iterable[Task], day: date) -> List[Task]:
    return [task for task in tasks if is_due_on(task, day)]


def summarize(
    tasks: Iterable[Task],
    *,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """Compute dashboard counts.

    Args:
        tasks: Snapshot of the user's tasks.
        today: Calendar day used for due/overdue checks (default: ``now``'s date).
        now: Reference instant for the done-this-week window (default: UTC now).
    """
    now = now or datetime.now(timezone.utc)
    today = today or now.date()
    week_start = now - DONE_WINDOW
    snapshot = list(tasks)

    done_this_week = sum(
        1 for task in snapshot
        if task.status == TaskStatus.DONE and task.updated_at >= week_start
    )
    recent = sorted(snapshot, key=lambda task: task.updated_at, reverse=True)

    return DashboardSummary(
        total_tasks=len(snapshot),
        due_today=sum(1 for task in snapshot if is_due_on(task, today)),
        overdue=sum(1 for task in snapshot if is_overdue(task, today)),
        done_this_week=done_this_week,
        recent_tasks=recent[:RECENT_TASKS_LIMIT],
    )
