"""Tasks Router - task CRUD and the filtered/sorted/paginated listing.

Handles:
- GET    /tasks        query params q, status, priority, tag, sort, order, page, limit
- POST   /tasks
- GET    /tasks/{id}
- PATCH  /tasks/{id}
- DELETE /tasks/{id}

Listing never rejects a query: unknown enum values and malformed numbers
fall back to defaults in ``TaskQuery.from_params``.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import (
    get_current_user,
    get_task_store,
    serialize_task,
)
from api.models import TaskCreateRequest, TaskUpdateRequest
from daily_dashboard.analysis import TaskQuery, query_tasks
from daily_dashboard.errors import ValidationError
from daily_dashboard.task_store import TaskStore

logger = logging.getLogger(__name__)

# Mounted at /api/v1/tasks
router = APIRouter()


@router.get("")
def list_tasks(
    q: Optional[str] = Query(None, description="Case-insensitive title/description search"),
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, description="created_at | end_date"),
    order: Optional[str] = Query(None, description="asc | desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> list:
    """List one page of the user's tasks."""
    params = TaskQuery.from_params({
        "q": q,
        "status": status_filter,
        "priority": priority,
        "tag": tag,
        "sort": sort,
        "order": order,
        "page": page,
        "limit": limit,
    })
    tasks = query_tasks(store.list_tasks(user), params)
    return [serialize_task(task) for task in tasks]


@router.post("")
def create_task(
    request: TaskCreateRequest,
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    try:
        task = store.create_task(user, request.to_domain())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return serialize_task(task)


@router.get("/{task_id}")
def get_task(
    task_id: str,
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    task = store.get_task(user, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found.")
    return serialize_task(task)


@router.patch("/{task_id}")
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    try:
        task = store.update_task(user, task_id, request.to_domain())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found.")
    return serialize_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> Response:
    if not store.delete_task(user, task_id):
        raise HTTPException(status_code=404, detail="Task not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
