"""Assistant Router - canned chat replies built from the user's data."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_assistant, get_current_user
from api.models import ChatRequest, ChatResponse
from daily_dashboard.assistant import AssistantResponder

# Mounted at /api/v1/ai
router = APIRouter()


@router.post("/chat")
def chat(
    request: ChatRequest,
    user: str = Depends(get_current_user),
    assistant: AssistantResponder = Depends(get_assistant),
) -> ChatResponse:
    result = assistant.reply(user, request.message)
    return ChatResponse(
        reply=result.reply,
        intent=result.intent,
        task_id=result.task.id if result.task else None,
    )
