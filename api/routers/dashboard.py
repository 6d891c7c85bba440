"""Dashboard Router - summary counts for the landing page."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user, get_task_store, serialize_summary
from daily_dashboard.analysis import summarize
from daily_dashboard.task_store import TaskStore

# Mounted at /api/v1/dashboard
router = APIRouter()


@router.get("/summary")
def dashboard_summary(
    user: str = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """Totals, due today, overdue, done in the last 7 days, recent tasks."""
    return serialize_summary(summarize(store.list_tasks(user)))
