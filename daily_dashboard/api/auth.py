"""Mock account and session handling.

Accounts and bearer tokens live in memory for the lifetime of the process.
Passwords are stored as salted PBKDF2 hashes; tokens are random opaque
strings with an expiry. This stands in for a real identity provider.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import os
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Optional

from fastapi import Depends, Header, HTTPException, status

from ..config import load_settings

logger = logging.getLogger(__name__)

DEV_BYPASS_ENV = "DASH_DEV_AUTH_BYPASS"
MIN_PASSWORD_LENGTH = 6
_PBKDF2_ROUNDS = 120_000


class AuthError(HTTPException):
    def __init__(self, detail: str, code: int = status.HTTP_401_UNAUTHORIZED) -> None:
        super().__init__(status_code=code, detail=detail)


@dataclass(slots=True)
class Session:
    token: str
    email: str
    expires_at: datetime


class SessionStore:
    """Registered accounts plus the tokens issued to them."""

    def __init__(self, *, ttl: timedelta = timedelta(days=7)) -> None:
        self._ttl = ttl
        self._accounts: Dict[str, str] = {}
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def signup(self, email: str, password: str) -> Session:
        email, password = _check_credentials(email, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError("password too short", status.HTTP_400_BAD_REQUEST)
        with self._lock:
            if email in self._accounts:
                raise AuthError("email exists", status.HTTP_409_CONFLICT)
            self._accounts[email] = hash_password(password)
        logger.info(f"Registered account {email}")
        return self._issue(email)

    def login(self, email: str, password: str) -> Session:
        email, password = _check_credentials(email, password)
        with self._lock:
            stored = self._accounts.get(email)
        if stored is None or not verify_password(password, stored):
            logger.warning(f"Failed login for {email}")
            raise AuthError("invalid credentials")
        return self._issue(email)

    def resolve(self, token: str, *, now: Optional[datetime] = None) -> Optional[str]:
        """Return the email behind ``token``; expired tokens are dropped."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at <= now:
                del self._sessions[token]
                return None
            return session.email

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def _issue(self, email: str) -> Session:
        session = Session(
            token=secrets.token_urlsafe(32),
            email=email,
            expires_at=datetime.now(timezone.utc) + self._ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ROUNDS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        salt_hex, digest_hex = stored.split("$", 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ROUNDS)
    return hmac.compare_digest(digest.hex(), digest_hex)


def _check_credentials(email: str, password: str) -> tuple[str, str]:
    email = (email or "").strip().lower()
    password = (password or "").strip()
    if not email or not password:
        raise AuthError("email/password required", status.HTTP_400_BAD_REQUEST)
    return email, password


@lru_cache
def get_session_store() -> SessionStore:
    """Process-wide session store (cached)."""
    settings = load_settings()
    return SessionStore(ttl=timedelta(hours=settings.session_ttl_hours))


def get_current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    dev_user: str | None = Header(default=None, alias="X-User-Email"),
    sessions: SessionStore = Depends(get_session_store),
) -> str:
    """Return the authenticated user's email.

    During development/testing set DASH_DEV_AUTH_BYPASS=1 and supply X-User-Email.
    """

    if os.getenv(DEV_BYPASS_ENV) == "1":
        if dev_user:
            return dev_user.strip().lower()
        raise AuthError(
            "Auth bypass enabled but X-User-Email header missing (dev only)."
        )

    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("missing token")

    token = authorization.split(" ", 1)[1].strip()
    email = sessions.resolve(token)
    if email is None:
        raise AuthError("invalid token")
    return email
