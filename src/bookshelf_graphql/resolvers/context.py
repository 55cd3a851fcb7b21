"""
Service container handed to every resolver.

The signing key, password hasher and notification bus are process-wide; they
are built once by ``create_services`` and passed explicitly rather than read
from module globals, so tests get fresh instances per test.
"""

import logging
from dataclasses import dataclass

from ..auth import AuthorizationGate, PasswordHasher, TokenService
from ..config import ServerConfig, get_config
from ..database import DatabaseManager
from ..notifications import NotificationBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    """Collaborators shared by all resolvers."""

    db: DatabaseManager
    hasher: PasswordHasher
    tokens: TokenService
    gate: AuthorizationGate
    bus: NotificationBus


def create_services(config: ServerConfig | None = None, db: DatabaseManager | None = None) -> Services:
    """
    Build the service container from configuration.

    Args:
        config: Settings to use; defaults to the global configuration
        db: Existing database manager; defaults to one for ``config``
    """
    config = config or get_config()
    tokens = TokenService(
        secret=config.get_signing_key(),
        ttl_seconds=config.token_ttl_seconds,
        algorithm=config.jwt_algorithm,
    )
    services = Services(
        db=db or DatabaseManager(config.get_database_url()),
        hasher=PasswordHasher(rounds=config.bcrypt_rounds),
        tokens=tokens,
        gate=AuthorizationGate(tokens, header=config.auth_header),
        bus=NotificationBus(queue_size=config.subscriber_queue_size),
    )
    logger.info(
        "Services ready (token ttl=%ss, bcrypt rounds=%d)",
        config.token_ttl_seconds,
        config.bcrypt_rounds,
    )
    return services
