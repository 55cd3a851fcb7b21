"""
Account models for the Bookshelf GraphQL service.

The password hash never leaves the database layer: ``User`` is the public
identity, ``Credentials`` is the validated input of ``register`` / ``login``
and ``AuthPayload`` is what both operations return.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class Credentials(BaseModel):
    """Username / plaintext password pair."""

    username: str = Field(
        ...,
        description="Account name, unique and case-sensitive",
        min_length=1,
        max_length=150,
    )

    password: str = Field(
        ...,
        description="Plaintext password; only its hash is stored",
        min_length=1,
        repr=False,
    )

    @field_validator("username")
    @classmethod
    def reject_blank_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def limit_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class User(BaseModel):
    """Public identity of an account."""

    id: int = Field(..., ge=1)
    username: str
    created_at: datetime | None = None

    model_config = ConfigDict(frozen=True)


class UserWithHash(User):
    """Account including its stored hash; used only by the login path."""

    password_hash: str = Field(..., repr=False)


class AuthPayload(BaseModel):
    """Result of a successful registration or login."""

    id: int
    username: str
    token: str = Field(..., repr=False)
