"""Configuration helpers for the Daily Dashboard API and CLI."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when a configuration value is present but unusable."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration shared by the API and CLI."""

    environment: str = "local"
    data_dir: Optional[Path] = None
    seed_demo_data: bool = True
    session_ttl_hours: int = 168
    allowed_frontend: Optional[str] = None
    log_level: str = "INFO"


def load_settings(*, env_file: Optional[str] = None) -> Settings:
    """Load settings from environment variables (and an optional .env file).

    Args:
        env_file: Explicit dotenv path. When omitted, python-dotenv searches
            upward from the working directory. Existing variables win.

    Returns:
        Settings with every value resolved.

    Raises:
        ConfigError: if a numeric or log-level variable cannot be parsed.
    """

    load_dotenv(env_file)

    data_dir = os.getenv("DASH_DATA_DIR", "").strip()
    frontend = os.getenv("DASH_ALLOWED_FRONTEND", "").strip()

    ttl_hours = _env_int("DASH_SESSION_TTL_HOURS", 168)
    if ttl_hours < 1:
        raise ConfigError("DASH_SESSION_TTL_HOURS must be at least 1.")

    log_level = os.getenv("DASH_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown DASH_LOG_LEVEL '{log_level}'.")

    return Settings(
        environment=os.getenv("DASH_ENV", "local").strip() or "local",
        data_dir=Path(data_dir) if data_dir else None,
        seed_demo_data=os.getenv("DASH_SEED_DEMO", "1").strip() == "1",
        session_ttl_hours=ttl_hours,
        allowed_frontend=frontend or None,
        log_level=log_level,
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got '{raw}'.") from exc
