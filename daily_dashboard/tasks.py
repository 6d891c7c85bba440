"""Task model, enums and demo data."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple
import uuid

from .errors import ValidationError


class TaskStatus(str, Enum):
    """Workflow states a task moves through."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def parse(cls, value: Any) -> Optional["TaskStatus"]:
        """Return the matching member, or None for blank/unknown values."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> Optional["TaskPriority"]:
        """Return the matching member, or None for blank/unknown values."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(slots=True)
class Task:
    """A trackable unit of work.

    ``start_date``/``end_date`` describe the calendar range the task occupies.
    Either bound may be missing; see :meth:`effective_range`.
    """

    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tags: List[str] = field(default_factory=list)

    def effective_range(self) -> Tuple[Optional[date], Optional[date]]:
        """Return (start, end) with a missing bound copied from the other."""
        start = self.start_date or self.end_date
        end = self.end_date or self.start_date
        return start, end

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape used by the API and the JSONL store."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from a stored dictionary.

        Raises:
            ValueError: if ``data`` is not an object or a text field has the
                wrong type.
        """
        check_record(data, required=("id", "title"), optional=("description",))
        created = parse_timestamp(data.get("created_at"))
        updated = parse_timestamp(data["updated_at"]) if data.get("updated_at") else created
        return cls(
            id=data["id"],
            title=data["title"],
            status=TaskStatus.parse(data.get("status")) or TaskStatus.TODO,
            priority=TaskPriority.parse(data.get("priority")) or TaskPriority.MEDIUM,
            created_at=created,
            updated_at=max(updated, created),
            description=data.get("description"),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            tags=normalize_tags(data.get("tags")),
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def check_record(
    data: Any,
    *,
    required: Tuple[str, ...],
    optional: Tuple[str, ...] = (),
) -> None:
    """Reject stored rows that would break the query engine later.

    ``required`` keys must hold non-empty strings, ``optional`` keys must be
    strings or null, and ``tags`` (when present) must be a list.

    Raises:
        ValueError: naming the first offending key.
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    for key in required:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise ValueError(f"'{key}' must be a non-empty string")
    for key in optional:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"'{key}' must be a string or null")
    tags = data.get("tags")
    if tags is not None and not isinstance(tags, list):
        raise ValueError("'tags' must be a list")


def parse_date(value: Any, *, field_name: str = "date") -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string (or pass through a date).

    Raises:
        ValidationError: if a non-empty value is not an ISO calendar date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Use YYYY-MM-DD format."
        ) from exc


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given."""
    if isinstance(value, datetime):
        parsed = value
    elif value:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    else:
        return utc_now()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Strip whitespace, drop blanks and duplicates, keep first-seen order."""
    result: List[str] = []
    for tag in tags or []:
        cleaned = str(tag).strip()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


def demo_tasks(*, today: Optional[date] = None) -> List[Task]:
    """Return the starter tasks shown to a brand-new user."""

    now = utc_now()
    today = today or now.date()
    return [
        Task(
            id=new_id(),
            title="Inbox triage",
            description="Sort quick wins and block tasks",
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            start_date=today,
            end_date=today,
            tags=["inbox", "ops"],
            created_at=now,
            updated_at=now,
        ),
        Task(
            id=new_id(),
            title="Weekly review",
            description="Review outcomes and plan next steps",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            start_date=today,
            end_date=today + timedelta(days=2),
            tags=["planning"],
            created_at=now,
            updated_at=now,
        ),
        Task(
            id=new_id(),
            title="Refactor dashboard cards",
            description="Clean up KPI layout and spacing",
            status=TaskStatus.DONE,
            priority=TaskPriority.LOW,
            tags=["ui"],
            created_at=now,
            updated_at=now,
        ),
    ]


def format_task_rows(tasks: Iterable[Task]) -> str:
    """Return a human-friendly summary table string."""

    lines = ["ID | Title | Status | Priority | Dates | Tags"]
    for task in tasks:
        start, end = task.effective_range()
        if start is None:
            dates = "-"
        elif start == end:
            dates = f"{start:%Y-%m-%d}"
        else:
            dates = f"{start:%Y-%m-%d}..{end:%Y-%m-%d}"
        tags = ", ".join(task.tags) or "-"
        lines.append(
            f"{task.id[:8]} | {task.title} | {task.status.value} | "
            f"{task.priority.value} | {dates} | {tags}"
        )
    return "\n".join(lines)
