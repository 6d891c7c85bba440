"""Shared fixtures: dev auth bypass on, demo seeding off, fresh stores per test."""
from __future__ import annotations

import os
from datetime import date, datetime, timedelta, timezone

import pytest

# Set env vars BEFORE any imports that might cache them
os.environ["DASH_DEV_AUTH_BYPASS"] = "1"
os.environ["DASH_SEED_DEMO"] = "0"
os.environ.pop("DASH_DATA_DIR", None)

from api.dependencies import reset_state  # noqa: E402
from daily_dashboard.tasks import Task, TaskPriority, TaskStatus  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def fresh_state():
    """Drop cached settings, stores and sessions around every test."""
    reset_state()
    yield
    reset_state()


def make_task(
    task_id: str,
    *,
    title: str | None = None,
    description: str | None = None,
    status: TaskStatus = TaskStatus.TODO,
    priority: TaskPriority = TaskPriority.MEDIUM,
    start: date | None = None,
    end: date | None = None,
    tags: list[str] | None = None,
    created_offset_minutes: int = 0,
    updated_at: datetime | None = None,
) -> Task:
    created = BASE_TIME + timedelta(minutes=created_offset_minutes)
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        description=description,
        status=status,
        priority=priority,
        start_date=start,
        end_date=end,
        tags=list(tags or []),
        created_at=created,
        updated_at=updated_at or created,
    )


@pytest.fixture
def task_factory():
    """The ``make_task`` builder, for tests that construct tasks directly."""
    return make_task
