"""Task repository package."""
from __future__ import annotations

from .store import TaskCreate, TaskStore, TaskUpdate

__all__ = ["TaskCreate", "TaskStore", "TaskUpdate"]
