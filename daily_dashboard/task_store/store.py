"""Task repository for the dashboard.

Tasks are kept per user in store order (newest first). The store is the only
owner of the mutable collections; readers get list snapshots that the query
engine can filter and sort without locking.

Create and update go through typed request objects. ``validated_fields``
checks every supplied value and returns the normalized changes; nothing is
merged into a task until validation has passed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, List, Optional, Union

from ..errors import ValidationError
from ..storage import UserCollectionStore
from ..tasks import (
    Task,
    TaskPriority,
    TaskStatus,
    new_id,
    normalize_tags,
    parse_date,
    utc_now,
)

logger = logging.getLogger(__name__)

DateInput = Union[date, str, None]


@dataclass(slots=True)
class TaskCreate:
    """Fields accepted when creating a task.

    ``due_date`` is a single-day shorthand used when neither bound is given.
    """

    title: str
    description: Optional[str] = None
    status: Union[TaskStatus, str, None] = None
    priority: Union[TaskPriority, str, None] = None
    start_date: DateInput = None
    end_date: DateInput = None
    due_date: DateInput = None
    tags: Optional[List[str]] = None

    def validated_fields(self) -> Dict[str, Any]:
        title = _require_title(self.title)
        status = _parse_status(self.status) or TaskStatus.TODO
        priority = _parse_priority(self.priority) or TaskPriority.MEDIUM

        start = parse_date(self.start_date, field_name="start_date")
        end = parse_date(self.end_date, field_name="end_date")
        due = parse_date(self.due_date, field_name="due_date")
        start, end = start or end or due, end or start or due
        _check_range(start, end)

        return {
            "title": title,
            "description": _clean_description(self.description),
            "status": status,
            "priority": priority,
            "start_date": start,
            "end_date": end,
            "tags": normalize_tags(self.tags),
        }


@dataclass(slots=True)
class TaskUpdate:
    """Partial update; ``None`` means "leave unchanged"."""

    title: Optional[str] = None
    description: Optional[str] = None
    status: Union[TaskStatus, str, None] = None
    priority: Union[TaskPriority, str, None] = None
    start_date: DateInput = None
    end_date: DateInput = None
    tags: Optional[List[str]] = None

    def validated_fields(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if self.title is not None:
            changes["title"] = _require_title(self.title)
        if self.description is not None:
            changes["description"] = _clean_description(self.description)
        if self.status is not None:
            changes["status"] = _parse_status(self.status)
        if self.priority is not None:
            changes["priority"] = _parse_priority(self.priority)

        start = parse_date(self.start_date, field_name="start_date")
        end = parse_date(self.end_date, field_name="end_date")
        if start is not None or end is not None:
            changes["start_date"] = start or end
            changes["end_date"] = end or start
        if self.tags is not None:
            changes["tags"] = normalize_tags(self.tags)
        return changes


class TaskStore(UserCollectionStore[Task]):
    """In-memory task repository with optional JSONL persistence."""

    suffix = "tasks"

    def _from_dict(self, data: Dict[str, Any]) -> Task:
        return Task.from_dict(data)

    def _to_dict(self, record: Task) -> Dict[str, Any]:
        return record.to_dict()

    def list_tasks(self, user_id: str) -> List[Task]:
        """Return a snapshot of the user's tasks, newest first."""
        return self._snapshot(user_id)

    def get_task(self, user_id: str, task_id: str) -> Optional[Task]:
        """Return a copy of the task, or None if the id is unknown."""
        with self._lock:
            task = self._find(user_id, task_id)
            return replace(task) if task is not None else None

    def create_task(self, user_id: str, request: TaskCreate) -> Task:
        """Validate ``request`` and store a new task.

        Raises:
            ValidationError: if any field is rejected.
        """
        fields = request.validated_fields()
        now = utc_now()
        task = Task(id=new_id(), created_at=now, updated_at=now, **fields)
        created = replace(task)
        self._insert(user_id, task)
        logger.info(f"Created task {task.id} for {user_id}")
        return created

    def update_task(self, user_id: str, task_id: str, request: TaskUpdate) -> Optional[Task]:
        """Apply a partial update, refreshing ``updated_at``.

        Returns:
            The updated task, or None if the id is unknown.

        Raises:
            ValidationError: if any supplied field is rejected, including a
                merged range whose start falls after its end.
        """
        changes = request.validated_fields()
        with self._lock:
            task = self._find(user_id, task_id)
            if task is None:
                return None

            start = changes.get("start_date", task.start_date)
            end = changes.get("end_date", task.end_date)
            _check_range(start, end)

            for key, value in changes.items():
                setattr(task, key, value)
            task.updated_at = max(utc_now(), task.created_at)
            self._persist(user_id)
            return replace(task)

    def delete_task(self, user_id: str, task_id: str) -> bool:
        """Delete a task; False if it did not exist."""
        deleted = self._remove(user_id, task_id)
        if deleted:
            logger.info(f"Deleted task {task_id} for {user_id}")
        return deleted


def _require_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("title required")
    return cleaned


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    cleaned = description.strip()
    return cleaned or None


def _parse_status(value: Union[TaskStatus, str, None]) -> Optional[TaskStatus]:
    if value is None:
        return None
    status = TaskStatus.parse(value)
    if status is None:
        raise ValidationError(
            f"Invalid status '{value}'. Valid: {[s.value for s in TaskStatus]}"
        )
    return status


def _parse_priority(value: Union[TaskPriority, str, None]) -> Optional[TaskPriority]:
    if value is None:
        return None
    priority = TaskPriority.parse(value)
    if priority is None:
        raise ValidationError(
            f"Invalid priority '{value}'. Valid: {[p.value for p in TaskPriority]}"
        )
    return priority


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and start > end:
        raise ValidationError(
            f"start_date {start.isoformat()} is after end_date {end.isoformat()}"
        )
