"""Canned assistant that briefs from, and registers tasks into, the stores."""
from __future__ import annotations

from .responder import (
    INTENT_BRIEFING,
    INTENT_CREATE_TASK,
    INTENT_UNSUPPORTED,
    AssistantResponder,
    ChatReply,
    classify_message,
    extract_title_and_due,
)

__all__ = [
    "INTENT_BRIEFING",
    "INTENT_CREATE_TASK",
    "INTENT_UNSUPPORTED",
    "AssistantResponder",
    "ChatReply",
    "classify_message",
    "extract_title_and_due",
]
