"""
TaskHub Backend — Auth Request/Response Schemas
=================================================

What:  Bodies for /api/register and /api/login, and the public identity.

Security:
    `UserResponse` is the only shape a user ever leaves the API in; it has
    no field for the password digest, so the digest cannot be serialized
    even by accident.
"""

from pydantic import Field, field_validator

from taskhub.schemas.common import CamelModel

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def normalize_email(value: str) -> str:
    """Emails are compared case-insensitively: stored and looked up lower-cased."""
    return _not_blank(value).strip().lower()


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return _not_blank(v).strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(CamelModel):
    """
    What:  The authenticated identity `{id, username, email}`.
    Who:   Returned by register and login; also the shape cached in a session.
    """

    id: int
    username: str
    email: str


class AuthResponse(CamelModel):
    message: str
    user: UserResponse
