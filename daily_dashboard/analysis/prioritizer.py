"""Priority ranking used by the assistant briefing."""
from __future__ import annotations

from typing import Iterable, List

from ..tasks import Task, TaskPriority, TaskStatus

PRIORITY_RANK = {
    TaskPriority.HIGH: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.LOW: 2,
}

TOP_PRIORITIES_LIMIT = 3


def top_priorities(tasks: Iterable[Task], *, limit: int = TOP_PRIORITIES_LIMIT) -> List[Task]:
    """Return unfinished tasks, highest priority first, ties in input order."""

    open_tasks = [task for task in tasks if task.status != TaskStatus.DONE]
    open_tasks.sort(key=lambda task: PRIORITY_RANK[task.priority])
    return open_tasks[:limit]
