"""
Authentication and authorization.

- passwords: bcrypt hashing for stored credentials
- tokens: signed, expiring bearer tokens
- gate: per-request token check used by mutating resolvers
"""

from .gate import AuthorizationGate
from .passwords import PasswordHasher
from .tokens import TokenClaims, TokenService

__all__ = [
    "AuthorizationGate",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
]
