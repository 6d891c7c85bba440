"""Shared dependencies and helper functions for API routers.

Stores are process-wide singletons built from settings on first use and
injected into routes with ``Depends`` so tests can swap them through
``app.dependency_overrides`` or reset them with ``reset_state()``.

Usage in routers:
    from api.dependencies import get_current_user, get_task_store, serialize_task
"""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from daily_dashboard.analysis import DashboardSummary
from daily_dashboard.api.auth import get_current_user, get_session_store  # noqa: F401 - re-export
from daily_dashboard.assistant import AssistantResponder
from daily_dashboard.config import Settings, load_settings
from daily_dashboard.note_store import NoteStore
from daily_dashboard.notes import Note, demo_notes
from daily_dashboard.task_store import TaskStore
from daily_dashboard.tasks import Task, demo_tasks


# =============================================================================
# Configuration Constants
# =============================================================================

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:4173",
]


def allowed_origins(settings: Settings) -> list[str]:
    origins = list(DEFAULT_ALLOWED_ORIGINS)
    if settings.allowed_frontend:
        origins.append(settings.allowed_frontend)
    return origins


# =============================================================================
# Cached Functions
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return load_settings()


@lru_cache
def get_task_store() -> TaskStore:
    """Get the task store (cached)."""
    settings = get_settings()
    return TaskStore(
        settings.data_dir,
        seed=demo_tasks if settings.seed_demo_data else None,
    )


@lru_cache
def get_note_store() -> NoteStore:
    """Get the note store (cached)."""
    settings = get_settings()
    return NoteStore(
        settings.data_dir,
        seed=demo_notes if settings.seed_demo_data else None,
    )


def get_assistant(
    task_store: TaskStore = Depends(get_task_store),
    note_store: NoteStore = Depends(get_note_store),
) -> AssistantResponder:
    return AssistantResponder(task_store, note_store)


def reset_state() -> None:
    """Drop cached settings, stores and sessions (tests, reloads)."""
    get_settings.cache_clear()
    get_task_store.cache_clear()
    get_note_store.cache_clear()
    get_session_store.cache_clear()


# =============================================================================
# Serialization Helpers
# =============================================================================

def serialize_task(task: Task) -> dict:
    """Serialize a Task to API response format."""
    return task.to_dict()


def serialize_note(note: Note) -> dict:
    """Serialize a Note to API response format."""
    return note.to_dict()


def serialize_summary(summary: DashboardSummary) -> dict:
    return summary.to_dict()
