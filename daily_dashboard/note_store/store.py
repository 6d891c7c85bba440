"""Note repository: the same per-user collection model as the task store."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..errors import ValidationError
from ..notes import Note
from ..storage import UserCollectionStore
from ..tasks import new_id, normalize_tags, utc_now

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NoteCreate:
    title: str
    content: str
    tags: Optional[List[str]] = None

    def validated_fields(self) -> Dict[str, Any]:
        return {
            "title": _require(self.title, "title"),
            "content": _require(self.content, "content"),
            "tags": normalize_tags(self.tags),
        }


@dataclass(slots=True)
class NoteUpdate:
    """Partial update; ``None`` means "leave unchanged"."""

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None

    def validated_fields(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if self.title is not None:
            changes["title"] = _require(self.title, "title")
        if self.content is not None:
            changes["content"] = _require(self.content, "content")
        if self.tags is not None:
            changes["tags"] = normalize_tags(self.tags)
        return changes


class NoteStore(UserCollectionStore[Note]):
    """In-memory note repository with optional JSONL persistence."""

    suffix = "notes"

    def _from_dict(self, data: Dict[str, Any]) -> Note:
        return Note.from_dict(data)

    def _to_dict(self, record: Note) -> Dict[str, Any]:
        return record.to_dict()

    def list_notes(self, user_id: str) -> List[Note]:
        """Return a snapshot of the user's notes, newest first."""
        return self._snapshot(user_id)

    def get_note(self, user_id: str, note_id: str) -> Optional[Note]:
        with self._lock:
            note = self._find(user_id, note_id)
            return replace(note) if note is not None else None

    def create_note(self, user_id: str, request: NoteCreate) -> Note:
        fields = request.validated_fields()
        now = utc_now()
        note = Note(id=new_id(), created_at=now, updated_at=now, **fields)
        created = replace(note)
        self._insert(user_id, note)
        logger.info(f"Created note {note.id} for {user_id}")
        return created

    def update_note(self, user_id: str, note_id: str, request: NoteUpdate) -> Optional[Note]:
        changes = request.validated_fields()
        with self._lock:
            note = self._find(user_id, note_id)
            if note is None:
                return None
            for key, value in changes.items():
                setattr(note, key, value)
            note.updated_at = max(utc_now(), note.created_at)
            self._persist(user_id)
            return replace(note)

    def delete_note(self, user_id: str, note_id: str) -> bool:
        deleted = self._remove(user_id, note_id)
        if deleted:
            logger.info(f"Deleted note {note_id} for {user_id}")
        return deleted


def _require(value: Optional[str], name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{name} required")
    return cleaned
