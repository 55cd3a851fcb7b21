"""
Authorization gate for mutating resolvers.

The gate pulls the bearer token out of the request metadata and hands it to
the token service. Token convention: the whole value of the ``authorization``
field is the token; an optional leading ``Bearer`` scheme is stripped, so both
``Authorization: <jwt>`` and ``Authorization: Bearer <jwt>`` are accepted.

The gate has no side effects; calling it twice with the same metadata gives
the same result.
"""

from collections.abc import Mapping

from .tokens import TokenClaims, TokenService

Metadata = Mapping[str, str] | str | None

_BEARER_PREFIX = "bearer "


class AuthorizationGate:
    """Verifies the token attached to an incoming operation."""

    def __init__(self, token_service: TokenService, header: str = "authorization"):
        self.token_service = token_service
        self.header = header.lower()

    def extract_token(self, metadata: Metadata) -> str | None:
        """Return the token carried by ``metadata``, or None when absent."""
        if metadata is None:
            return None

        if isinstance(metadata, str):
            value = metadata
        else:
            value = next(
                (v for k, v in metadata.items() if k.lower() == self.header),
                None,
            )
            if value is None:
                return None

        value = value.strip()
        if value.lower().startswith(_BEARER_PREFIX):
            value = value[len(_BEARER_PREFIX):].strip()
        return value or None

    def authorize(self, metadata: Metadata) -> TokenClaims:
        """
        Verify the token in ``metadata``.

        Raises:
            Unauthenticated: If no token is present
            InvalidToken: If the token does not verify
        """
        return self.token_service.verify(self.extract_token(metadata))
