"""FastAPI service for the Daily Dashboard."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from daily_dashboard import __version__
from daily_dashboard.logs import configure_logging

from api.dependencies import allowed_origins, get_settings
from api.routers import (
    assistant_router,
    auth_router,
    dashboard_router,
    notes_router,
    tasks_router,
)

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="Daily Dashboard API",
    version=__version__,
    description="Tasks, notes and a daily briefing for the dashboard frontend.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(settings),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(tasks_router, prefix="/api/v1/tasks", tags=["tasks"])
app.include_router(notes_router, prefix="/api/v1/notes", tags=["notes"])
app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])
app.include_router(assistant_router, prefix="/api/v1/ai", tags=["assistant"])

logger.info(f"Daily Dashboard API ready (env={settings.environment})")


@app.get("/health")
def health_check() -> dict:
    """Liveness check with the active environment name."""
    current = get_settings()
    return {
        "status": "ok",
        "time": datetime.now(timezone.utc).isoformat(),
        "environment": current.environment,
        "storage": "jsonl" if current.data_dir else "memory",
    }
