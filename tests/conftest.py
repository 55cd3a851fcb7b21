"""Test configuration and fixtures for the Bookshelf GraphQL service.

Every test gets isolated collaborators:
1. A fresh in-memory SQLite database
2. A token service with a fixed key and a controllable clock
3. A cheap bcrypt cost so hashing does not dominate test time
4. A fresh notification bus
"""

from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import logfire
import pytest

from bookshelf_graphql.auth import AuthorizationGate, PasswordHasher, TokenService
from bookshelf_graphql.config import ServerConfig, reset_config
from bookshelf_graphql.database import DatabaseManager
from bookshelf_graphql.notifications import NotificationBus
from bookshelf_graphql.resolvers import Services

TEST_SECRET = "test-signing-key-that-is-long-enough-for-hs256"


def pytest_configure(config):  # noqa: ARG001
    """Keep spans local during tests."""
    logfire.configure(send_to_logfire=False, console=False)


class FakeClock:
    """Deterministic, manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# === Database Fixtures ===


@pytest.fixture
def db() -> Generator[DatabaseManager, None, None]:
    """Provide a fresh in-memory database with all tables created."""
    manager = DatabaseManager("sqlite://")
    manager.init_database()
    yield manager
    manager.close()


# === Auth Fixtures ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock: FakeClock) -> TokenService:
    return TokenService(TEST_SECRET, ttl_seconds=3600, clock=clock)


@pytest.fixture
def signing_key() -> str:
    return TEST_SECRET


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def gate(token_service: TokenService) -> AuthorizationGate:
    return AuthorizationGate(token_service)


# === Service Fixtures ===


@pytest.fixture
def bus() -> Generator[NotificationBus, None, None]:
    notification_bus = NotificationBus(queue_size=10)
    yield notification_bus
    notification_bus.close()


@pytest.fixture
def services(
    db: DatabaseManager,
    hasher: PasswordHasher,
    token_service: TokenService,
    gate: AuthorizationGate,
    bus: NotificationBus,
) -> Services:
    return Services(db=db, hasher=hasher, tokens=token_service, gate=gate, bus=bus)


@pytest.fixture
def auth_headers(token_service: TokenService) -> dict[str, str]:
    """Headers carrying a valid token for an arbitrary account."""
    token = token_service.issue({"sub": 1, "username": "admin"})
    return {"Authorization": f"Bearer {token}"}


# === Configuration Fixtures ===


@pytest.fixture
def test_config(tmp_path: Path) -> Generator[ServerConfig, None, None]:
    """Provide an isolated server configuration."""
    reset_config()

    config = ServerConfig(
        server_name="test-bookshelf",
        server_version="0.0.1-test",
        database_path=tmp_path / "test_bookshelf.db",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()
