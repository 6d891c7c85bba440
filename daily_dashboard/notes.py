"""Note model and demo data."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from .tasks import check_record, new_id, normalize_tags, parse_timestamp, utc_now


@dataclass(slots=True)
class Note:
    """A free-text record with a title and tags."""

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        check_record(data, required=("id", "title"), optional=("content",))
        created = parse_timestamp(data.get("created_at"))
        updated = parse_timestamp(data["updated_at"]) if data.get("updated_at") else created
        return cls(
            id=data["id"],
            title=data["title"],
            content=data.get("content") or "",
            created_at=created,
            updated_at=max(updated, created),
            tags=normalize_tags(data.get("tags")),
        )


def demo_notes() -> List[Note]:
    """Return the starter notes shown to a brand-new user."""

    now = utc_now()
    return [
        Note(
            id=new_id(),
            title="My day ideas",
            content="- Focus on top 3 tasks\n- Keep meetings short",
            tags=["personal"],
            created_at=now,
            updated_at=now,
        ),
        Note(
            id=new_id(),
            title="Project notes",
            content="Remember to update the task filters.",
            tags=["work"],
            created_at=now,
            updated_at=now,
        ),
    ]
