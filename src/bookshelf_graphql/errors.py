"""
Domain errors reported to API callers.

Every resolver failure is one of these. Each carries a stable ``code`` that the
GraphQL layer copies into ``extensions.code`` so clients can branch on it
without parsing messages. Repository-level failures live in
``database.repository`` and are translated here by the resolvers.
"""


class ApiError(Exception):
    """Base class for errors surfaced as a structured operation failure."""

    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(ApiError):
    """Missing or malformed input, rejected before any side effect."""

    code = "INVALID_INPUT"
    default_message = "Invalid input"


class DuplicateUsername(ApiError):
    """Registration attempted with a username that is already taken."""

    code = "DUPLICATE_USERNAME"
    default_message = "Registration failed: username is already taken"


class InvalidCredentials(ApiError):
    """Login failed.

    Raised for both an unknown username and a wrong password, with the same
    message, so responses cannot be used to enumerate accounts.
    """

    code = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"


class Unauthenticated(ApiError):
    """No token was supplied with a request that requires one."""

    code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class InvalidToken(ApiError):
    """Token is malformed, has a bad signature, or has expired."""

    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"
