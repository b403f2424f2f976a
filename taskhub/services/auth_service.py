"""
TaskHub Backend — Auth Service
================================

What:  Registration and credential checks.
Who:   Called by the /api/register and /api/login route handlers.

Registration:
    1. Reject a taken email (ConflictError → 400)
    2. Digest the password with bcrypt (threadpool)
    3. Insert the user; a unique-constraint violation on flush means a
       concurrent registration won, and is reported the same way as step 1

Login:
    Unknown email and wrong password both raise the same
    AuthenticationError, so the response does not reveal which emails are
    registered. An unknown email is still checked against a dummy digest
    of the same work factor, so both failures take about as long.

Sessions are not touched here; the route owns the session store.
"""

import logging
import secrets
from typing import Dict

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.exceptions import AuthenticationError, ConflictError, DatabaseError
from taskhub.models.user import User
from taskhub.schemas.user import LoginRequest, RegisterRequest, UserResponse
from taskhub.security import hash_password_async, verify_password_async

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A user with that email already exists."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class AuthService:
    """
    The database session is passed into each call.

    The only state is a per-work-factor cache of dummy digests, verified
    against when a login names an unknown email so that both failure
    paths pay for one bcrypt check.
    """

    def __init__(self):
        self._dummy_digests: Dict[int, str] = {}

    async def register(
        self,
        db: AsyncSession,
        payload: RegisterRequest,
        bcrypt_rounds: int = 10,
    ) -> UserResponse:
        """
        Create a user account.

        Returns:
            The public identity of the new user (no digest).
        Raises:
            ConflictError: email already registered
            DatabaseError: query or insert failed
        """
        try:
            existing = await self._find_by_email(db, payload.email)
            if existing is not None:
                raise ConflictError(
                    message=DUPLICATE_EMAIL_MESSAGE,
                    context={"field": "email"},
                )

            digest = await hash_password_async(payload.password, bcrypt_rounds)
            user = User(
                username=payload.username,
                email=payload.email,
                password_digest=digest,
            )
            db.add(user)
            await db.flush()

        except IntegrityError:
            logger.info("Registration lost a race on a duplicate email")
            raise ConflictError(message=DUPLICATE_EMAIL_MESSAGE, context={"field": "email"})
        except SQLAlchemyError as e:
            logger.error("Database error during registration: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Server error during registration.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: id=%s", user.id)
        return UserResponse.model_validate(user)

    async def authenticate(
        self,
        db: AsyncSession,
        payload: LoginRequest,
        bcrypt_rounds: int = 10,
    ) -> UserResponse:
        """
        Check an email/password pair.

        Raises:
            AuthenticationError: unknown email or wrong password (same message)
            DatabaseError: lookup failed
        """
        try:
            user = await self._find_by_email(db, payload.email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Server error during login.",
                context={"error_type": type(e).__name__},
            )

        if user is None:
            await verify_password_async(payload.password, await self._dummy_digest(bcrypt_rounds))
            raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

        if not await verify_password_async(payload.password, user.password_digest):
            raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

        logger.info("User logged in: id=%s", user.id)
        return UserResponse.model_validate(user)

    async def _dummy_digest(self, rounds: int) -> str:
        digest = self._dummy_digests.get(rounds)
        if digest is None:
            digest = await hash_password_async(secrets.token_urlsafe(16), rounds)
            self._dummy_digests[rounds] = digest
        return digest

    async def _find_by_email(self, db: AsyncSession, email: str):
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


auth_service = AuthService()
