"""Configuration management for the Bookshelf GraphQL service.

Settings are read from the environment (``BOOKSHELF_`` prefix) and an optional
``.env`` file, and validated with Pydantic v2:
1. Server metadata and HTTP binding
2. Persistence location
3. Authentication (signing key, token lifetime, hashing cost)
4. Subscription delivery limits
"""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ServerConfig(BaseSettings):
    """Service configuration.

    The signing key and hashing cost are process-wide and read-only once the
    service has been created; everything else only affects bootstrap.
    """

    model_config = SettingsConfigDict(
        # Use BOOKSHELF_ prefix for all env vars
        env_prefix="BOOKSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="bookshelf-graphql",
        description="Service name reported in logs",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Service version",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Database Configuration ===

    database_path: Path = Field(
        default=Path("data/bookshelf.db"),
        description="SQLite database file path",
    )

    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides database_path when set",
    )

    # === HTTP Configuration ===

    http_host: str = Field(
        default="127.0.0.1",
        description="Host the GraphQL endpoint binds to",
    )

    http_port: int = Field(
        default=4000,
        description="Port the GraphQL endpoint binds to",
        ge=1024,  # Avoid privileged ports
        le=65535,
    )

    graphql_ide: bool = Field(
        default=True,
        description="Serve the GraphiQL IDE on GET requests",
    )

    # === Security Configuration ===

    jwt_secret: str | None = Field(
        default=None,
        description="HMAC key used to sign authorization tokens",
        # Sensitive data - loaded from environment only
        repr=False,
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
        pattern=r"^HS(256|384|512)$",
    )

    token_ttl_seconds: int = Field(
        default=3600,  # 1 hour
        description="Validity window of an issued token",
        ge=1,
    )

    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor (log2 of the iteration count)",
        ge=4,
        le=31,
    )

    auth_header: str = Field(
        default="authorization",
        description="Request metadata field carrying the bearer token",
        min_length=1,
    )

    # === Subscription Configuration ===

    subscriber_queue_size: int = Field(
        default=1000,
        description="Pending events a subscriber may accumulate before eviction",
        ge=1,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Validation Methods ===

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Anchor relative paths at the working directory and create the parent."""
        path = v.expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create database directory {path.parent}: {e}") from e
        return path

    @field_validator("auth_header")
    @classmethod
    def normalize_auth_header(cls, v: str) -> str:
        """Header names are matched case-insensitively."""
        return v.strip().lower()

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str | None) -> str | None:
        if v is not None and len(v) < 32:
            raise ValueError("JWT secret must be at least 32 characters")
        return v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.database_path}"

    def get_signing_key(self) -> str:
        """Return the token signing key, generating one if none is configured.

        A generated key lives only as long as this config instance, so tokens
        do not survive a restart.
        """
        if self.jwt_secret is None:
            logger.warning(
                "No BOOKSHELF_JWT_SECRET configured; generated an ephemeral signing key"
            )
            self.jwt_secret = secrets.token_urlsafe(48)
        return self.jwt_secret


# === Process-wide Instance ===


@lru_cache(maxsize=1)
def get_config() -> ServerConfig:
    """Settings loaded from the environment on first use, then reused."""
    return ServerConfig()


def reset_config() -> None:
    """Forget the loaded settings so the next ``get_config`` re-reads them."""
    get_config.cache_clear()
