"""Shared Pydantic models for API routers.

Request bodies only check JSON types here. Domain rules (enum values, date
format, required text) are enforced by the store request objects so that the
API and the CLI reject the same inputs with the same messages.

Usage in routers:
    from api.models import TaskCreateRequest, TaskUpdateRequest
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from daily_dashboard.note_store import NoteCreate, NoteUpdate
from daily_dashboard.task_store import TaskCreate, TaskUpdate


# =============================================================================
# Auth Models
# =============================================================================

class SignupRequest(BaseModel):
    """Request model for account creation."""
    email: str
    password: str


class LoginRequest(BaseModel):
    """Request model for login."""
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str


# =============================================================================
# Task Models
# =============================================================================

class TaskCreateRequest(BaseModel):
    """Request model for creating tasks."""
    title: str
    description: Optional[str] = None
    status: Optional[str] = Field(None, description="todo | in_progress | done")
    priority: Optional[str] = Field(None, description="low | medium | high")
    start_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    end_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    due_date: Optional[str] = Field(
        None, description="Single-day shorthand used when start/end are absent."
    )
    tags: Optional[List[str]] = None

    def to_domain(self) -> TaskCreate:
        return TaskCreate(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            start_date=self.start_date,
            end_date=self.end_date,
            due_date=self.due_date,
            tags=self.tags,
        )


class TaskUpdateRequest(BaseModel):
    """Request model for updating tasks. Omitted or null fields are unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    tags: Optional[List[str]] = None

    def to_domain(self) -> TaskUpdate:
        return TaskUpdate(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            start_date=self.start_date,
            end_date=self.end_date,
            tags=self.tags,
        )


# =============================================================================
# Note Models
# =============================================================================

class NoteCreateRequest(BaseModel):
    """Request model for creating notes."""
    title: str
    content: str
    tags: Optional[List[str]] = None

    def to_domain(self) -> NoteCreate:
        return NoteCreate(title=self.title, content=self.content, tags=self.tags)


class NoteUpdateRequest(BaseModel):
    """Request model for updating notes."""
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None

    def to_domain(self) -> NoteUpdate:
        return NoteUpdate(title=self.title, content=self.content, tags=self.tags)


# =============================================================================
# Assistant Models
# =============================================================================

class ChatRequest(BaseModel):
    """Request model for assistant chat."""
    message: str


class ChatResponse(BaseModel):
    reply: str
    intent: str
    task_id: Optional[str] = None
