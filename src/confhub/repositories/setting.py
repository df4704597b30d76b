"""SettingRepository for settings data access.

Implements the SettingsStore contract on top of the generic Repository
base. Lookups signal "not found" with None; any other database failure is
raised as RepositoryError. A violation of the unique key constraint is
raised as ConflictError so that two racing creates for the same key end in
a conflict rather than an internal error.
"""

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from typing_extensions import override

from confhub.core.exceptions import ConflictError, RepositoryError
from confhub.models.base import utcnow
from confhub.models.setting import Setting
from confhub.repositories.base import Repository


class SettingRepository(Repository[Setting]):
    """Repository for Setting entity operations.

    Attributes:
        session: The async database session for executing queries.
    """

    @property
    @override
    def _model_class(self) -> type[Setting]:
        return Setting

    @override
    async def create(self, entity: Setting, /) -> Setting:
        """Insert a new setting.

        Raises:
            ConflictError: If a setting with the same key already exists.
            RepositoryError: If the database operation fails.
        """
        try:
            return await super().create(entity)
        except RepositoryError as e:
            if isinstance(e.original, IntegrityError):
                raise ConflictError(
                    "setting with this key already exists",
                    resource_type="Setting",
                    identifier=entity.key,
                ) from e.original
            raise

    async def update(self, setting_id: int, setting: Setting, /) -> Setting:
        """Persist every mutable field of ``setting`` for row ``setting_id``.

        Args:
            setting_id: Primary key of the row to update.
            setting: Entity holding the new field values.

        Returns:
            The persistent, updated entity.

        Raises:
            ConflictError: If the new key is already used by another setting.
            RepositoryError: If the database operation fails.
        """
        try:
            setting.id = setting_id
            setting.modified_at = utcnow()
            merged = await self.session.merge(setting)
            await self.session.flush()
            return merged
        except IntegrityError as e:
            raise ConflictError(
                "setting with this key already exists",
                resource_type="Setting",
                identifier=setting.key,
            ) from e
        except Exception as e:
            raise RepositoryError(
                "Failed to update setting",
                operation="update",
                original=e,
            ) from e

    async def update_by_key(self, key: str, value: str, /) -> None:
        """Write a new value for the setting with ``key``.

        Only ``value`` and ``modified_at`` are touched. Matching no row is
        not an error.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            _ = await self.session.execute(
                update(Setting)
                .where(Setting.key == key)
                .values(value=value, modified_at=utcnow())
            )
        except Exception as e:
            raise RepositoryError(
                "Failed to update setting by key",
                operation="update_by_key",
                original=e,
            ) from e

    async def get(self, setting_id: int, /) -> Setting | None:
        """Retrieve a setting by id.

        Returns:
            The Setting if found, None otherwise.

        Raises:
            RepositoryError: If the database operation fails.
        """
        return await self.get_by_id(setting_id)

    async def get_by_key(self, key: str, /) -> Setting | None:
        """Retrieve a setting by its key.

        Args:
            key: The exact setting key.

        Returns:
            The Setting if found, None otherwise.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            result = await self.session.scalars(
                select(Setting).where(Setting.key == key)
            )
            return result.first()
        except Exception as e:
            raise RepositoryError(
                "Failed to get setting by key",
                operation="get_by_key",
                original=e,
            ) from e

    async def get_by_category(self, category: str, /) -> Sequence[Setting]:
        """Retrieve all settings whose category equals ``category`` exactly.

        Returns:
            Matching settings ordered by key, possibly empty.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            result = await self.session.scalars(
                select(Setting)
                .where(Setting.category == category)
                .order_by(Setting.key)
            )
            return result.all()
        except Exception as e:
            raise RepositoryError(
                "Failed to get settings by category",
                operation="get_by_category",
                original=e,
            ) from e

    @override
    async def get_all(self) -> Sequence[Setting]:
        """Retrieve all settings ordered by category, then key.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            result = await self.session.scalars(
                select(Setting).order_by(Setting.category, Setting.key)
            )
            return result.all()
        except Exception as e:
            raise RepositoryError(
                "Failed to list settings",
                operation="get_all",
                original=e,
            ) from e

    async def delete(self, setting_id: int, /) -> None:
        """Delete the setting with ``setting_id``. Missing rows are ignored.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            _ = await self.session.execute(
                delete(Setting).where(Setting.id == setting_id)
            )
        except Exception as e:
            raise RepositoryError(
                "Failed to delete setting",
                operation="delete",
                original=e,
            ) from e
