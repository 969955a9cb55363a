"""Dependency providers for FastAPI routers."""

from __future__ import annotations

from typing import Annotated

import jwt
from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from postboard_backend.api.services import (
    AuthService,
    PostService,
    TokenPayload,
    UserService,
)
from postboard_backend.database import get_session
from postboard_backend.settings import BackendSettings, get_settings

SESSION_COOKIE = "access_token"

_security = HTTPBearer(auto_error=False)
_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Return the shared :class:`AuthService` instance."""

    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    access_token: Annotated[str | None, Cookie(alias=SESSION_COOKIE)] = None,
    settings: BackendSettings = Depends(get_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPayload | None:
    """Resolve the caller from a bearer token or the session cookie.

    Returns ``None`` when authentication is switched off.
    """

    if not settings.auth_enabled:
        return None

    token = credentials.credentials if credentials is not None else access_token
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing credentials"
        )

    try:
        return auth_service.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        ) from exc


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    """Return a :class:`UserService` bound to the request session."""

    return UserService(session)


def get_post_service(session: Session = Depends(get_session)) -> PostService:
    """Return a :class:`PostService` bound to the request session."""

    return PostService(session)


__all__ = [
    "SESSION_COOKIE",
    "get_auth_service",
    "get_current_principal",
    "get_post_service",
    "get_user_service",
]
