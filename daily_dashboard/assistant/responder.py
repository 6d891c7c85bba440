"""Template-driven assistant replies.

The assistant understands two kinds of message:

- task registration ("add task Prepare slides 2024-12-01", "task: ...",
  "업무 등록 ...", "일정 등록 ..."), which creates a todo/medium task whose
  single date (if any) becomes both range bounds;
- briefing requests (any message mentioning "brief", "summary", "브리핑",
  "요약", "정리" or "우선순위"), which get today's tasks, the top three open
  priorities and the three newest note titles.

Anything else gets a short reply listing what the assistant can do. No model
is called; replies are assembled from the stores.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from ..analysis import tasks_due_on, top_priorities
from ..note_store import NoteStore
from ..task_store import TaskCreate, TaskStore
from ..tasks import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

INTENT_CREATE_TASK = "create_task"
INTENT_BRIEFING = "briefing"
INTENT_UNSUPPORTED = "unsupported"

CREATE_PHRASES = ("업무등록", "업무 등록", "일정등록", "일정 등록", "add task")
CREATE_PREFIX = "task:"
BRIEF_KEYWORDS = ("브리핑", "요약", "정리", "우선순위", "summary", "brief")
# Longest first so "업무 등록" is removed before the bare "등록".
_STRIP_PHRASES = sorted(CREATE_PHRASES + (CREATE_PREFIX, "등록"), key=len, reverse=True)
_STRIP_RE = re.compile("|".join(re.escape(p) for p in _STRIP_PHRASES), re.IGNORECASE)

RECENT_NOTES_IN_BRIEFING = 3

USAGE_HINT = (
    'Please provide a task title. Example: "add task Prepare meeting 2024-12-01".'
)
UNSUPPORTED_REPLY = (
    "I can only help with task registration and briefing. "
    'Try: "add task Prepare meeting 2024-12-01" or "today\'s briefing".'
)


@dataclass(slots=True)
class ChatReply:
    """What the assistant said, and the task it created if any."""

    reply: str
    intent: str
    task: Optional[Task] = None


def classify_message(message: str) -> str:
    lowered = message.strip().lower()
    if lowered.startswith(CREATE_PREFIX) or any(p in lowered for p in CREATE_PHRASES):
        return INTENT_CREATE_TASK
    if any(keyword in lowered for keyword in BRIEF_KEYWORDS):
        return INTENT_BRIEFING
    return INTENT_UNSUPPORTED


def extract_title_and_due(message: str) -> Tuple[str, Optional[date]]:
    """Split a registration message into a title and its first ISO date."""

    due: Optional[date] = None
    kept: List[str] = []
    for token in message.split():
        if due is None:
            try:
                due = datetime.strptime(token, "%Y-%m-%d").date()
                continue
            except ValueError:
                pass
        kept.append(token)

    title = _STRIP_RE.sub("", " ".join(kept))
    title = " ".join(title.split()).strip(" :")
    return title, due


class AssistantResponder:
    """Answers chat messages using the caller's task and note stores."""

    def __init__(self, task_store: TaskStore, note_store: NoteStore) -> None:
        self._tasks = task_store
        self._notes = note_store

    def reply(self, user_id: str, message: str, *, today: Optional[date] = None) -> ChatReply:
        intent = classify_message(message)
        if intent == INTENT_CREATE_TASK:
            return self._register_task(user_id, message)
        if intent == INTENT_UNSUPPORTED:
            return ChatReply(reply=UNSUPPORTED_REPLY, intent=INTENT_UNSUPPORTED)
        today = today or datetime.now(timezone.utc).date()
        return ChatReply(
            reply=self.briefing(user_id, message, today=today),
            intent=INTENT_BRIEFING,
        )

    def briefing(self, user_id: str, message: str, *, today: date) -> str:
        tasks = self._tasks.list_tasks(user_id)
        notes = self._notes.list_notes(user_id)[:RECENT_NOTES_IN_BRIEFING]
        due_today = tasks_due_on(tasks, today)
        top = top_priorities(tasks)

        lines = [f"Question: {message.strip()}"]
        lines.append(f"Today ({today.isoformat()}): {len(due_today)} scheduled")
        lines.extend(f"- {task.title} ({task.priority.value})" for task in due_today)
        if top:
            ranked = ", ".join(f"{task.title}({task.priority.value})" for task in top)
        else:
            ranked = "none"
        lines.append(f"Top priorities: {ranked}")
        if notes:
            lines.append("Recent notes: " + ", ".join(note.title for note in notes))
        lines.append("This is a canned briefing; no language model was used.")
        return "\n".join(lines)

    def _register_task(self, user_id: str, message: str) -> ChatReply:
        title, due = extract_title_and_due(message)
        if not title:
            return ChatReply(reply=USAGE_HINT, intent=INTENT_CREATE_TASK)

        task = self._tasks.create_task(
            user_id,
            TaskCreate(
                title=title,
                status=TaskStatus.TODO,
                priority=TaskPriority.MEDIUM,
                due_date=due,
            ),
        )
        logger.info(f"Assistant registered task {task.id} for {user_id}")
        suffix = f" (due {due.isoformat()})" if due else ""
        return ChatReply(
            reply=f"Task created: {task.title}{suffix}",
            intent=INTENT_CREATE_TASK,
            task=task,
        )
