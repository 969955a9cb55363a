"""Login and logout redirects for the external identity provider."""

from __future__ import annotations

from fastapi import APIRouter, Cookie, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from postboard_backend.api.dependencies import (
    SESSION_COOKIE,
    get_auth_service,
    get_current_principal,
)
from postboard_backend.api.models import PrincipalResponse
from postboard_backend.api.services import (
    AuthenticationError,
    AuthService,
    TokenPayload,
)
from postboard_backend.settings import BackendSettings, get_settings

STATE_COOKIE = "oauth_state"

router = APIRouter(tags=["auth"])


@router.get("/login")
def login(
    auth_service: AuthService = Depends(get_auth_service),
    settings: BackendSettings = Depends(get_settings),
) -> RedirectResponse:
    """Send the browser to the provider's authorization endpoint."""

    state = auth_service.new_state()
    response = RedirectResponse(
        auth_service.build_authorization_url(state),
        status_code=status.HTTP_302_FOUND,
    )
    response.set_cookie(
        STATE_COOKIE,
        state,
        httponly=True,
        samesite="lax",
        secure=settings.auth_cookie_secure,
    )
    return response


@router.get("/login/oauth2/code/{registration_id}")
def login_callback(
    registration_id: str,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth_state: str | None = Cookie(default=None),
    auth_service: AuthService = Depends(get_auth_service),
    settings: BackendSettings = Depends(get_settings),
) -> RedirectResponse:
    """Finish the authorization-code flow and open a session."""

    if registration_id != auth_service.registration_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Unknown registration"
        )
    if error is not None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=error)
    if state is None or oauth_state is None or state != oauth_state:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="State mismatch"
        )
    if code is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing code"
        )

    try:
        token = auth_service.complete_login(code)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc

    response = RedirectResponse(
        settings.login_success_url, status_code=status.HTTP_302_FOUND
    )
    response.delete_cookie(STATE_COOKIE, secure=settings.auth_cookie_secure)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.auth_cookie_secure,
    )
    return response


@router.get("/logout")
def logout(
    auth_service: AuthService = Depends(get_auth_service),
    settings: BackendSettings = Depends(get_settings),
) -> RedirectResponse:
    """Drop the session and continue to the provider's logout endpoint."""

    response = RedirectResponse(
        auth_service.build_logout_url(), status_code=status.HTTP_302_FOUND
    )
    response.delete_cookie(SESSION_COOKIE, secure=settings.auth_cookie_secure)
    return response


@router.get("/me", response_model=PrincipalResponse)
def current_principal(
    principal: TokenPayload | None = Depends(get_current_principal),
) -> PrincipalResponse:
    """Return the subject of the current session."""

    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Authentication disabled"
        )
    return PrincipalResponse(subject=principal.sub)
