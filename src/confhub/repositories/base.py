"""Generic repository base for SQLAlchemy async data access.

Subclasses provide the model class via ``_model_class`` and add
entity-specific queries. Every database failure is wrapped in
RepositoryError with the failing operation name attached.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from confhub.core.exceptions import RepositoryError
from confhub.models.base import Base

T = TypeVar("T", bound=Base)


class Repository(ABC, Generic[T]):
    """Base repository with common CRUD operations.

    Attributes:
        session: The async database session for executing queries.
    """

    session: AsyncSession

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    @abstractmethod
    def _model_class(self) -> type[T]:
        """Return the SQLAlchemy model class this repository manages."""
        ...

    async def get_by_id(self, id: int, /) -> T | None:  # noqa: A002
        """Retrieve an entity by primary key.

        Args:
            id: The primary key value.

        Returns:
            The entity if found, None otherwise.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            return await self.session.get(self._model_class, id)
        except Exception as e:
            raise RepositoryError(
                f"Failed to get {self._model_class.__name__} by id",
                operation="get_by_id",
                original=e,
            ) from e

    async def get_all(self) -> Sequence[T]:
        """Retrieve all entities.

        Returns:
            A sequence of every entity of this type.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            result = await self.session.scalars(select(self._model_class))
            return result.all()
        except Exception as e:
            raise RepositoryError(
                f"Failed to get all {self._model_class.__name__} entities",
                operation="get_all",
                original=e,
            ) from e

    async def create(self, entity: T, /) -> T:
        """Persist a new entity and flush so generated values are populated.

        Args:
            entity: The transient entity to insert.

        Returns:
            The same entity, now persistent.

        Raises:
            RepositoryError: If the database operation fails.
        """
        try:
            self.session.add(entity)
            await self.session.flush()
            return entity
        except Exception as e:
            raise RepositoryError(
                f"Failed to create {self._model_class.__name__}",
                operation="create",
                original=e,
            ) from e

