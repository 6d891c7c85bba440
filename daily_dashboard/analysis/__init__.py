"""Task query, dashboard aggregation and priority ranking."""

from .prioritizer import PRIORITY_RANK, top_priorities
from .query import (
    MAX_PAGE_SIZE,
    NoteQuery,
    NoteSortKey,
    SortOrder,
    TaskQuery,
    TaskSortKey,
    paginate,
    query_notes,
    query_tasks,
)
from .summary import DashboardSummary, is_due_on, is_overdue, summarize, tasks_due_on

__all__ = [
    "DashboardSummary",
    "MAX_PAGE_SIZE",
    "NoteQuery",
    "NoteSortKey",
    "PRIORITY_RANK",
    "SortOrder",
    "TaskQuery",
    "TaskSortKey",
    "is_due_on",
    "is_overdue",
    "paginate",
    "query_notes",
    "query_tasks",
    "summarize",
    "tasks_due_on",
    "top_priorities",
]
