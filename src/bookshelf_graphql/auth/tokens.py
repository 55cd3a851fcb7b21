"""
Token service - issues and verifies signed, time-limited bearer tokens.

Tokens are HS256 JWTs carrying the account id (``sub``), the username, and
``iat`` / ``exp`` timestamps. The server keeps no session state: a token is
valid exactly when its signature matches the signing key and the current time
is before ``exp``. There is no revocation; a token stays usable until it
expires.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import jwt
from pydantic import BaseModel, ValidationError

from ..errors import InvalidToken, Unauthenticated
from ..models.user import User

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenClaims(BaseModel):
    """Verified contents of a token."""

    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Signs and verifies tokens with a single process-wide key."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing key must not be empty")
        if ttl_seconds < 1:
            raise ValueError("Token lifetime must be at least one second")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, claims: Mapping[str, Any]) -> str:
        """
        Sign ``claims`` together with issue and expiry timestamps.

        Args:
            claims: Subject claims; must contain ``sub``

        Returns:
            The encoded token
        """
        if "sub" not in claims:
            raise ValueError("Token claims must include a subject ('sub')")

        issued_at = int(self._clock().timestamp())
        payload = {
            **claims,
            "sub": str(claims["sub"]),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def issue_for(self, user: User) -> str:
        """Issue a token for an account."""
        return self.issue({"sub": user.id, "username": user.username})

    def verify(self, token: str | None) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            Unauthenticated: If no token is supplied
            InvalidToken: If the token is malformed, has a bad signature,
                lacks required claims, or has expired
        """
        if not token:
            raise Unauthenticated()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                # Expiry is checked below against the injected clock
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "iat", "exp"],
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidToken() from e

        try:
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                username=payload.get("username", ""),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (TypeError, ValueError, OverflowError, ValidationError) as e:
            raise InvalidToken() from e

        if self._clock() >= claims.expires_at:
            logger.debug("Token for user %s expired", claims.user_id)
            raise InvalidToken("Token has expired")

        return claims
