"""
TaskHub Backend — Server-Side Session Store
=============================================

What:  Maps opaque session tokens to authenticated identities.
How:   Login creates a random token, stores `{id, username, email}` under it
       and hands the token to the client as a cookie. The Auth Guard looks
       the token up on every protected request. Logout destroys it.
Who:   Built once by `create_app()` and stored on `app.state.session_store`;
       reached through the `get_session_store` dependency.

Contract:
    - Tokens are 256-bit values from `secrets`; they carry no data.
    - Only the public identity is stored, never password material.
    - Expired sessions behave exactly like missing ones.
    - `destroy()` of an unknown token is a no-op (logout is idempotent).

Scaling Note:
    InMemorySessionStore is safe for a single asyncio process: no method
    awaits while it mutates the dict. Multiple workers need a shared
    backend implementing SessionStore.
"""

import logging
import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from taskhub.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Abstract interface for session persistence."""

    @abstractmethod
    async def create(self, identity: UserResponse) -> str:
        """Stores the identity under a new token and returns the token."""

    @abstractmethod
    async def get(self, token: str) -> Optional[UserResponse]:
        """Returns the identity for a live token, or None."""

    @abstractmethod
    async def destroy(self, token: str) -> bool:
        """Removes the session. Returns False if there was nothing to remove."""

    @abstractmethod
    async def count(self) -> int:
        """Number of live sessions."""


@dataclass
class _SessionEntry:
    identity: UserResponse
    expires_at: float


class InMemorySessionStore(SessionStore):
    """
    Process-local session store with sliding expiry.

    Each successful `get()` pushes the expiry forward by `ttl_seconds`, so an
    active user stays logged in and an idle one is dropped.
    """

    # Sweep expired entries every N creations
    SWEEP_INTERVAL = 100

    def __init__(self, ttl_seconds: int = 86_400, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, _SessionEntry] = {}
        self._created = 0

    async def create(self, identity: UserResponse) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = _SessionEntry(
            identity=identity,
            expires_at=self._clock() + self.ttl_seconds,
        )
        self._created += 1
        if self._created % self.SWEEP_INTERVAL == 0:
            self._sweep()
        logger.debug("Session created for user %s", identity.id)
        return token

    async def get(self, token: str) -> Optional[UserResponse]:
        entry = self._sessions.get(token)
        if entry is None:
            return None
        now = self._clock()
        if entry.expires_at <= now:
            del self._sessions[token]
            return None
        entry.expires_at = now + self.ttl_seconds
        return entry.identity

    async def destroy(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    async def count(self) -> int:
        self._sweep()
        return len(self._sessions)

    def _sweep(self) -> None:
        now = self._clock()
        expired = [t for t, entry in self._sessions.items() if entry.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Swept %d expired sessions", len(expired))
