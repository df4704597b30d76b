"""Tests for environment-based configuration loading."""

import pytest

from confhub.config import Settings, load_settings
from confhub.core.exceptions import ConfigurationError

TOKEN = "x" * 32


class TestLoadSettings:
    def test_defaults_with_only_admin_token(self) -> None:
        settings = load_settings({"ADMIN_TOKEN": TOKEN})

        assert settings == Settings(admin_token=TOKEN)
        assert settings.read_token is None
        assert settings.port == 8000
        assert settings.log_level == "INFO"
        assert settings.auto_create_schema is False

    def test_coerces_string_values(self) -> None:
        settings = load_settings(
            {
                "ADMIN_TOKEN": TOKEN,
                "PORT": "9000",
                "DEBUG": "true",
                "LOG_JSON": "1",
                "LOG_LEVEL": "debug",
                "AUTO_CREATE_SCHEMA": "false",
                "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
            }
        )

        assert settings.port == 9000
        assert settings.debug is True
        assert settings.log_json is True
        assert settings.log_level == "DEBUG"
        assert settings.auto_create_schema is False
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_empty_values_fall_back_to_defaults(self) -> None:
        settings = load_settings({"ADMIN_TOKEN": TOKEN, "READ_TOKEN": "", "PORT": ""})

        assert settings.read_token is None
        assert settings.port == 8000

    def test_ignores_unrelated_variables(self) -> None:
        settings = load_settings({"ADMIN_TOKEN": TOKEN, "PATH": "/usr/bin"})
        assert settings.admin_token == TOKEN

    def test_missing_admin_token_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="admin_token"):
            _ = load_settings({})

    def test_short_admin_token_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            _ = load_settings({"ADMIN_TOKEN": "short"})

    @pytest.mark.parametrize("port", ["0", "70000", "http"])
    def test_invalid_port_raises(self, port: str) -> None:
        with pytest.raises(ConfigurationError):
            _ = load_settings({"ADMIN_TOKEN": TOKEN, "PORT": port})

    def test_unknown_log_level_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            _ = load_settings({"ADMIN_TOKEN": TOKEN, "LOG_LEVEL": "verbose"})
