"""
TaskHub Backend — Auth Route Handlers
=======================================

What:  POST /api/register, POST /api/login, POST /api/logout.
How:   Credential checks live in AuthService; these handlers own the
       session store and the session cookie.

Session cookie:
    HttpOnly, path "/", lifetime SESSION_TTL_SECONDS, SameSite and Secure
    from settings. The value is an opaque token; the identity stays
    server-side.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.config import Settings
from taskhub.database import commit_session, get_db_session
from taskhub.dependencies import get_session_store, get_session_token, get_settings
from taskhub.exceptions import SessionStoreError
from taskhub.schemas.common import ErrorResponse, MessageResponse
from taskhub.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from taskhub.services.auth_service import auth_service
from taskhub.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def _set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields or email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Creates an account. Does not log the new user in."""
    user = await auth_service.register(db, payload, bcrypt_rounds=settings.bcrypt_rounds)
    await commit_session(db)
    return AuthResponse(message="User registered successfully.", user=user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Log in and start a session",
)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
    current_token: Optional[str] = Depends(get_session_token),
) -> AuthResponse:
    """
    Verify credentials and bind the identity to a fresh session.

    A session the client already holds is destroyed first, so logging in
    again never leaves two live tokens for one browser.
    """
    identity = await auth_service.authenticate(db, payload, bcrypt_rounds=settings.bcrypt_rounds)

    try:
        if current_token:
            await store.destroy(current_token)
        token = await store.create(identity)
    except Exception as e:
        logger.error("Session store failure during login: %s", str(e), exc_info=True)
        raise SessionStoreError(message="Server error during login.")

    _set_session_cookie(response, settings, token)
    return AuthResponse(message="Login successful.", user=identity)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={500: {"description": "Session teardown failed", "model": ErrorResponse}},
    summary="End the current session",
)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(get_session_token),
) -> MessageResponse:
    """Idempotent: succeeds whether or not a session exists."""
    if not token:
        return MessageResponse(message="You are already logged out.")

    try:
        destroyed = await store.destroy(token)
    except Exception as e:
        logger.error("Error destroying session: %s", str(e), exc_info=True)
        raise SessionStoreError(message="Error logging out.")

    _clear_session_cookie(response, settings)
    if not destroyed:
        return MessageResponse(message="You are already logged out.")
    return MessageResponse(message="Logout successful.")
