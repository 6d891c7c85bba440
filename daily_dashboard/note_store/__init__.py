"""Note repository package."""
from __future__ import annotations

from .store import NoteCreate, NoteStore, NoteUpdate

__all__ = ["NoteCreate", "NoteStore", "NoteUpdate"]
