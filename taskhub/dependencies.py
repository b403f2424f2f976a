"""
TaskHub Backend — Request Dependencies (Auth Guard)
=====================================================

What:  FastAPI dependencies that hand each handler its context objects.
How:   Everything is read from `request.app.state`, populated by
       `create_app()`. Nothing here is a module-level singleton.

Auth Guard:
    `require_identity` resolves the session cookie to an identity. A missing
    cookie, an unknown token and an expired token all fail the same way:
    401 before the handler body runs. It only reads the store; no
    password or digest is involved.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from taskhub.config import Settings
from taskhub.exceptions import AuthenticationError
from taskhub.schemas.user import UserResponse
from taskhub.sessions import SessionStore

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """The raw session token from the cookie, if the client sent one."""
    return request.cookies.get(settings.session_cookie_name) or None


async def require_identity(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
) -> UserResponse:
    """
    Gate for protected routes.

    Returns:
        The identity cached at login time.
    Raises:
        AuthenticationError (401) when there is no live session.
    """
    identity = await store.get(token) if token else None
    if identity is None:
        raise AuthenticationError()

    # Picked up by RequestLoggingMiddleware for the access line
    request.state.user_id = identity.id
    return identity
