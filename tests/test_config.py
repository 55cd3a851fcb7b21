"""Tests for service configuration.

These tests cover:
1. Default values
2. Environment variable loading
3. Validation rules
4. Signing key handling
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from bookshelf_graphql.config import ServerConfig, get_config, reset_config


class TestServerConfig:
    """Test configuration behavior."""

    def test_default_configuration(self, tmp_path, monkeypatch):
        """Defaults match the documented reference values."""
        monkeypatch.chdir(tmp_path)
        config = ServerConfig()

        assert config.server_name == "bookshelf-graphql"
        assert config.token_ttl_seconds == 3600
        assert config.bcrypt_rounds == 12
        assert config.jwt_algorithm == "HS256"
        assert config.auth_header == "authorization"
        assert config.database_path == Path.cwd() / "data" / "bookshelf.db"
        assert config.jwt_secret is None

    def test_environment_variable_loading(self, tmp_path):
        env_vars = {
            "BOOKSHELF_SERVER_NAME": "test-shelf",
            "BOOKSHELF_DATABASE_PATH": str(tmp_path / "env.db"),
            "BOOKSHELF_TOKEN_TTL_SECONDS": "60",
            "BOOKSHELF_BCRYPT_ROUNDS": "5",
            "BOOKSHELF_JWT_SECRET": "x" * 40,
            "BOOKSHELF_DEBUG": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = ServerConfig()

            assert config.server_name == "test-shelf"
            assert config.database_path == tmp_path / "env.db"
            assert config.token_ttl_seconds == 60
            assert config.bcrypt_rounds == 5
            assert config.jwt_secret == "x" * 40
            assert config.debug is True
            assert config.is_development is True

    def test_secret_hidden_from_repr(self, test_config):
        assert test_config.jwt_secret not in repr(test_config)

    def test_short_secret_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            ServerConfig(database_path=tmp_path / "db.sqlite", jwt_secret="too-short")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_bounds(self, tmp_path, rounds):
        with pytest.raises(ValidationError):
            ServerConfig(database_path=tmp_path / "db.sqlite", bcrypt_rounds=rounds)

    def test_token_ttl_must_be_positive(self, tmp_path):
        with pytest.raises(ValidationError):
            ServerConfig(database_path=tmp_path / "db.sqlite", token_ttl_seconds=0)

    def test_auth_header_normalized(self, tmp_path):
        config = ServerConfig(database_path=tmp_path / "db.sqlite", auth_header=" X-Auth-Token ")
        assert config.auth_header == "x-auth-token"

    def test_database_directory_created(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "shelf.db"
        config = ServerConfig(database_path=db_path)

        assert config.database_path.parent.is_dir()
        assert config.get_database_url() == f"sqlite:///{db_path}"

    def test_database_url_override(self, tmp_path):
        config = ServerConfig(
            database_path=tmp_path / "ignored.db",
            database_url="postgresql://user@localhost/shelf",
        )
        assert config.get_database_url() == "postgresql://user@localhost/shelf"


class TestSigningKey:
    def test_configured_key_is_used(self, test_config):
        assert test_config.get_signing_key() == test_config.jwt_secret

    def test_generated_key_is_stable(self, tmp_path):
        config = ServerConfig(database_path=tmp_path / "db.sqlite")

        first = config.get_signing_key()
        assert len(first) >= 32
        assert config.get_signing_key() == first

    def test_generated_keys_differ_between_instances(self, tmp_path):
        a = ServerConfig(database_path=tmp_path / "a.sqlite")
        b = ServerConfig(database_path=tmp_path / "b.sqlite")
        assert a.get_signing_key() != b.get_signing_key()


class TestConfigSingleton:
    def test_get_config_returns_same_instance(self, tmp_path):
        reset_config()
        with patch.dict(os.environ, {"BOOKSHELF_DATABASE_PATH": str(tmp_path / "s.db")}):
            assert get_config() is get_config()
        reset_config()

    def test_reset_config(self, tmp_path):
        reset_config()
        with patch.dict(os.environ, {"BOOKSHELF_DATABASE_PATH": str(tmp_path / "s.db")}):
            first = get_config()
            reset_config()
            assert get_config() is not first
            assert get_config().database_path == Path(tmp_path / "s.db")
        reset_config()
