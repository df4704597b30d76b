"""Request and response schemas for the confhub HTTP API.

All schemas are msgspec Structs. Litestar validates most inbound bodies
against them; handlers that must resolve the target first decode with
``decode_body``. JSON field names are snake_case.
"""

from datetime import UTC, datetime
from typing import Annotated, Literal, Self, TypeVar

import msgspec

from confhub.core.exceptions import ValidationError
from confhub.models.setting import Setting

NonEmptyKey = Annotated[str, msgspec.Meta(min_length=1, max_length=255)]


class SettingRequest(msgspec.Struct, kw_only=True):
    """Body for creating a setting or replacing one by id."""

    key: NonEmptyKey
    value: str
    category: Annotated[str, msgspec.Meta(max_length=100)] = ""
    description: str | None = None
    requires_restart: bool = False
    requires_db_reset: bool = False


class SettingValueUpdate(msgspec.Struct, kw_only=True):
    """Body for changing only the value of a setting by key."""

    value: str


class SettingResponse(msgspec.Struct, kw_only=True):
    """A setting as returned by the API."""

    id: int
    key: str
    value: str
    category: str
    description: str | None
    requires_restart: bool
    requires_db_reset: bool
    created_at: datetime
    modified_at: datetime

    @classmethod
    def from_model(cls, setting: Setting, /) -> Self:
        """Build a response from a Setting entity."""
        return cls(
            id=setting.id,
            key=setting.key,
            value=setting.value,
            category=setting.category,
            description=setting.description,
            requires_restart=setting.requires_restart,
            requires_db_reset=setting.requires_db_reset,
            created_at=_as_utc(setting.created_at),
            modified_at=_as_utc(setting.modified_at),
        )


S = TypeVar("S", bound=msgspec.Struct)


def decode_body(raw: bytes, body_type: type[S], /) -> S:
    """Decode a JSON request body into ``body_type``.

    Raises:
        ValidationError: If the body is not JSON or does not match ``body_type``.
    """
    try:
        return msgspec.json.decode(raw, type=body_type)
    except msgspec.ValidationError as e:
        raise ValidationError(str(e)) from e
    except msgspec.DecodeError as e:
        raise ValidationError(f"malformed request body: {e}") from e


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class ErrorResponse(msgspec.Struct, omit_defaults=True):
    """Error body shared by every failing endpoint.

    ``error`` is left out when there is nothing safe to report, ``code`` while
    no application-specific code applies.
    """

    status: int
    status_text: str
    error: str | None = None
    code: int = 0


class HealthCheckResponse(msgspec.Struct, kw_only=True):
    """Overall health status with per-dependency results."""

    status: Literal["healthy", "degraded"]
    checks: dict[str, bool]


class LivenessResponse(msgspec.Struct, kw_only=True):
    status: Literal["alive"]


class ReadinessResponse(msgspec.Struct, kw_only=True):
    status: Literal["ready", "not ready"]
