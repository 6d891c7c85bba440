"""API Routers Package.

Each router handles one domain and is mounted under /api/v1 by main.py:

    app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(tasks_router, prefix="/api/v1/tasks", tags=["tasks"])
    app.include_router(notes_router, prefix="/api/v1/notes", tags=["notes"])
    app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
    app.include_router(assistant_router, prefix="/api/v1/ai", tags=["assistant"])
"""

from .assistant import router as assistant_router
from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .notes import router as notes_router
from .tasks import router as tasks_router

__all__ = [
    "assistant_router",
    "auth_router",
    "dashboard_router",
    "notes_router",
    "tasks_router",
]
