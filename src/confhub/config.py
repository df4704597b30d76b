"""Application configuration loaded from environment variables.

Settings is a frozen msgspec Struct. ``load_settings()`` collects the
recognised environment variables and validates them with
``msgspec.convert`` in non-strict mode, so string values such as "8000"
or "true" are coerced to their declared types.
"""

import os
from collections.abc import Mapping
from typing import Annotated, Literal

import msgspec

from confhub.core.exceptions import ConfigurationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Environment variable name -> Settings field name
_ENV_FIELDS: dict[str, str] = {
    "ADMIN_TOKEN": "admin_token",
    "READ_TOKEN": "read_token",
    "DATABASE_URL": "database_url",
    "HOST": "host",
    "PORT": "port",
    "DEBUG": "debug",
    "LOG_LEVEL": "log_level",
    "LOG_JSON": "log_json",
    "AUTO_CREATE_SCHEMA": "auto_create_schema",
}


class Settings(msgspec.Struct, kw_only=True, frozen=True):
    """Runtime configuration for the confhub service."""

    admin_token: Annotated[str, msgspec.Meta(min_length=16)]
    """Bearer token granting admin access (all routes)."""
    read_token: Annotated[str, msgspec.Meta(min_length=16)] | None = None
    """Bearer token granting read-only access. Optional."""
    database_url: str = "sqlite+aiosqlite:///./confhub.db"
    """SQLAlchemy async database URL."""
    host: str = "127.0.0.1"
    port: Annotated[int, msgspec.Meta(ge=1, le=65535)] = 8000
    debug: bool = False
    log_level: LogLevel = "INFO"
    log_json: bool = False
    """Render logs as JSON lines instead of the console format."""
    auto_create_schema: bool = False
    """Create missing tables on startup instead of relying on migrations."""


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The validated Settings.

    Raises:
        ConfigurationError: If a required variable is missing or a value
            fails validation.
    """
    source = os.environ if environ is None else environ

    raw: dict[str, object] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        value = source.get(env_name)
        if value is None or value == "":
            continue
        raw[field_name] = value.upper() if field_name == "log_level" else value

    try:
        return msgspec.convert(raw, Settings, strict=False)
    except msgspec.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
