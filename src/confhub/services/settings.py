"""Settings service for managing configuration entries.

Orchestrates one short sequence of store calls per operation and turns
"absent" and "already taken" outcomes into NotFoundError and ConflictError.
The service never caches: every call goes to the store.

Key uniqueness is checked with a get_by_key probe before create and before
a rename. The probe and the write are not atomic; SettingRepository backs
the check with the table's unique constraint.
"""

from collections.abc import Sequence
from typing import Protocol

import structlog

from confhub.core.exceptions import ConflictError, NotFoundError, ValidationError
from confhub.models.setting import Setting

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)  # pyright: ignore[reportAny]

RESOURCE_TYPE = "Setting"

# Setting ids are stored as BIGINT
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


class SettingsStore(Protocol):
    """Persistence contract for Setting entities.

    Lookups return None when nothing matches. Any other failure is raised
    (RepositoryError for the SQLAlchemy implementation).
    """

    async def create(self, entity: Setting, /) -> Setting: ...

    async def update(self, setting_id: int, setting: Setting, /) -> Setting: ...

    async def update_by_key(self, key: str, value: str, /) -> None: ...

    async def get(self, setting_id: int, /) -> Setting | None: ...

    async def get_by_key(self, key: str, /) -> Setting | None: ...

    async def get_by_category(self, category: str, /) -> Sequence[Setting]: ...

    async def get_all(self) -> Sequence[Setting]: ...

    async def delete(self, setting_id: int, /) -> None: ...


def parse_setting_id(raw: str, /) -> int:
    """Convert a path segment into a setting id.

    Raises:
        ValidationError: If ``raw`` is not an integer in the signed 64-bit range.
    """
    try:
        setting_id = int(raw)
    except ValueError:
        setting_id = None

    if setting_id is None or not _MIN_ID <= setting_id <= _MAX_ID:
        raise ValidationError(
            "invalid setting ID",
            field_errors={"id": [f"'{raw}' is not a valid 64-bit integer"]},
        )
    return setting_id


class SettingsService:
    """Service for settings CRUD.

    Attributes:
        store: The SettingsStore used for persistence.
    """

    store: SettingsStore

    def __init__(self, store: SettingsStore, /) -> None:
        self.store = store

    async def list_settings(self) -> Sequence[Setting]:
        """Return every setting in the store's natural order."""
        return await self.store.get_all()

    async def get_by_category(self, category: str, /) -> Sequence[Setting]:
        """Return settings whose category matches exactly."""
        return await self.store.get_by_category(category)

    async def get(self, setting_id: int, /) -> Setting:
        """Return the setting with ``setting_id``.

        Raises:
            NotFoundError: If no setting has that id.
        """
        setting = await self.store.get(setting_id)
        if setting is None:
            raise NotFoundError(RESOURCE_TYPE, setting_id)
        return setting

    async def get_by_key(self, key: str, /) -> Setting:
        """Return the setting with ``key``.

        Raises:
            NotFoundError: If no setting has that key.
        """
        setting = await self.store.get_by_key(key)
        if setting is None:
            raise NotFoundError(RESOURCE_TYPE, key)
        return setting

    async def create(
        self,
        *,
        key: str,
        value: str,
        category: str = "",
        description: str | None = None,
        requires_restart: bool = False,
        requires_db_reset: bool = False,
    ) -> Setting:
        """Create a new setting.

        Returns:
            The persisted Setting with id and timestamps assigned.

        Raises:
            ValidationError: If ``value`` is empty.
            ConflictError: If a setting with ``key`` already exists.
        """
        _require_value(value)
        await self._ensure_key_available(key)

        setting = Setting(
            key=key,
            value=value,
            category=category,
            description=description,
            requires_restart=requires_restart,
            requires_db_reset=requires_db_reset,
        )
        created = await self.store.create(setting)
        logger.info("setting_created", setting_id=created.id, key=created.key)
        return created

    async def update(
        self,
        setting_id: int,
        /,
        *,
        key: str,
        value: str,
        category: str = "",
        description: str | None = None,
        requires_restart: bool = False,
        requires_db_reset: bool = False,
    ) -> Setting:
        """Replace every mutable field of an existing setting.

        Raises:
            NotFoundError: If no setting has ``setting_id``.
            ValidationError: If ``value`` is empty.
            ConflictError: If ``key`` changes to one used by another setting.
        """
        existing = await self.get(setting_id)
        _require_value(value)

        if key != existing.key:
            await self._ensure_key_available(key)

        existing.key = key
        existing.value = value
        existing.category = category
        existing.description = description
        existing.requires_restart = requires_restart
        existing.requires_db_reset = requires_db_reset

        updated = await self.store.update(setting_id, existing)
        logger.info("setting_updated", setting_id=setting_id, key=updated.key)
        return updated

    async def update_value(self, key: str, value: str, /) -> Setting:
        """Change only the value of the setting with ``key``.

        Returns:
            The setting as re-read from the store after the write.

        Raises:
            NotFoundError: If no setting has ``key``.
            ValidationError: If ``value`` is empty.
        """
        _ = await self.get_by_key(key)
        _require_value(value)

        await self.store.update_by_key(key, value)
        updated = await self.get_by_key(key)
        logger.info("setting_value_updated", setting_id=updated.id, key=key)
        return updated

    async def delete(self, setting_id: int, /) -> None:
        """Delete the setting with ``setting_id``.

        Raises:
            NotFoundError: If no setting has ``setting_id``.
        """
        _ = await self.get(setting_id)
        await self.store.delete(setting_id)
        logger.info("setting_deleted", setting_id=setting_id)

    async def _ensure_key_available(self, key: str) -> None:
        if await self.store.get_by_key(key) is not None:
            raise ConflictError(
                "setting with this key already exists",
                resource_type=RESOURCE_TYPE,
                identifier=key,
            )


def _require_value(value: str) -> None:
    if not value:
        raise ValidationError(
            "value is required", field_errors={"value": ["Must not be empty"]}
        )
