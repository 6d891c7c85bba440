"""Filtering, sorting and pagination over task and note snapshots.

The functions here are pure: they take a list the caller already fetched from
a store and return a new list. Query objects are built from raw request
parameters with ``from_params``, which never raises. Unknown enum values are
dropped and bad numbers fall back to defaults, so a sloppy query string still
returns a result.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar, Union

from ..notes import Note
from ..tasks import Task, TaskPriority, TaskStatus

DEFAULT_TASK_PAGE_SIZE = 10
DEFAULT_NOTE_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TaskSortKey(str, Enum):
    CREATED_AT = "created_at"
    END_DATE = "end_date"


class NoteSortKey(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


@dataclass(slots=True, frozen=True)
class TaskQuery:
    """Parameters for :func:`query_tasks`."""

    text: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tag: Optional[str] = None
    sort: TaskSortKey = TaskSortKey.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = DEFAULT_TASK_PAGE_SIZE

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "TaskQuery":
        """Build a query from raw request parameters (``q`` or ``text``)."""
        return cls(
            text=_search_text(params.get("q", params.get("text"))),
            status=TaskStatus.parse(params.get("status")),
            priority=TaskPriority.parse(params.get("priority")),
            tag=_clean_text(params.get("tag")),
            sort=_parse_enum(TaskSortKey, params.get("sort"), TaskSortKey.CREATED_AT),
            order=_parse_enum(SortOrder, params.get("order"), SortOrder.DESC),
            page=_parse_positive_int(params.get("page"), 1),
            limit=min(
                _parse_positive_int(params.get("limit"), DEFAULT_TASK_PAGE_SIZE),
                MAX_PAGE_SIZE,
            ),
        )


@dataclass(slots=True, frozen=True)
class NoteQuery:
    """Parameters for :func:`query_notes`."""

    text: Optional[str] = None
    tag: Optional[str] = None
    sort: NoteSortKey = NoteSortKey.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = DEFAULT_NOTE_PAGE_SIZE

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "NoteQuery":
        return cls(
            text=_search_text(params.get("q", params.get("text"))),
            tag=_clean_text(params.get("tag")),
            sort=_parse_enum(NoteSortKey, params.get("sort"), NoteSortKey.CREATED_AT),
            order=_parse_enum(SortOrder, params.get("order"), SortOrder.DESC),
            page=_parse_positive_int(params.get("page"), 1),
            limit=min(
                _parse_positive_int(params.get("limit"), DEFAULT_NOTE_PAGE_SIZE),
                MAX_PAGE_SIZE,
            ),
        )


def query_tasks(
    tasks: Sequence[Task],
    params: Union[TaskQuery, Mapping[str, Any], None] = None,
) -> List[Task]:
    """Return one page of ``tasks`` after filtering and sorting.

    Filters apply in order: text, status, priority, tag. Sorting is stable,
    so tasks with equal keys keep their input order in both directions.
    A page past the end is an empty list.
    """
    query = _coerce(params, TaskQuery)
    result = list(tasks)

    if query.text:
        needle = query.text.lower()
        result = [
            t for t in result
            if needle in t.title.lower() or needle in (t.description or "").lower()
        ]

    if query.status is not None:
        result = [t for t in result if t.status == query.status]

    if query.priority is not None:
        result = [t for t in result if t.priority == query.priority]

    if query.tag:
        result = [t for t in result if query.tag in t.tags]

    key: Callable[[Task], Any]
    if query.sort == TaskSortKey.END_DATE:
        key = end_date_sort_key
    else:
        key = _created_at

    result.sort(key=key, reverse=query.order == SortOrder.DESC)
    return paginate(result, page=query.page, limit=query.limit)


def query_notes(
    notes: Sequence[Note],
    params: Union[NoteQuery, Mapping[str, Any], None] = None,
) -> List[Note]:
    """Return one page of ``notes`` matching text (title/content) and tag."""
    query = _coerce(params, NoteQuery)
    result = list(notes)

    if query.text:
        needle = query.text.lower()
        result = [
            n for n in result
            if needle in n.title.lower() or needle in n.content.lower()
        ]

    if query.tag:
        result = [n for n in result if query.tag in n.tags]

    if query.sort == NoteSortKey.UPDATED_AT:
        result.sort(key=lambda n: n.updated_at, reverse=query.order == SortOrder.DESC)
    else:
        result.sort(key=lambda n: n.created_at, reverse=query.order == SortOrder.DESC)
    return paginate(result, page=query.page, limit=query.limit)


def end_date_sort_key(task: Task) -> str:
    """End date, else start date, else "" (which sorts first ascending).

    ISO dates compare the same lexicographically and chronologically.
    """
    bound = task.end_date or task.start_date
    return bound.isoformat() if bound else ""


def paginate(items: Sequence[T], *, page: int, limit: int) -> List[T]:
    """Slice out 1-based ``page`` of size ``limit``."""
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    return list(items[start:start + limit])


def _created_at(task: Task) -> datetime:
    return task.created_at


def _coerce(params: Any, query_cls: Any) -> Any:
    if params is None:
        return query_cls()
    if isinstance(params, query_cls):
        return params
    return query_cls.from_params(params)


def _search_text(value: Any) -> Optional[str]:
    """Keep the search text as given; all-blank text means no text filter."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _parse_enum(enum_cls: Any, value: Any, default: Any) -> Any:
    if value is None:
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


def _parse_positive_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return max(number, 1)
