"""Auth Router - mock signup/login issuing opaque bearer tokens."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status

from api.dependencies import get_session_store
from api.models import AuthResponse, LoginRequest, SignupRequest
from daily_dashboard.api.auth import SessionStore

# Mounted at /api/v1/auth
router = APIRouter()


@router.post("/signup")
def signup(
    request: SignupRequest,
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    session = sessions.signup(request.email, request.password)
    return AuthResponse(token=session.token)


@router.post("/login")
def login(
    request: LoginRequest,
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    session = sessions.login(request.email, request.password)
    return AuthResponse(token=session.token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    authorization: str | None = Header(default=None, alias="Authorization"),
    sessions: SessionStore = Depends(get_session_store),
) -> None:
    if authorization and authorization.startswith("Bearer "):
        sessions.revoke(authorization.split(" ", 1)[1].strip())
