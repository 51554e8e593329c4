"""
Base repository.

Generic operations shared by all repositories.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.base import Base

# Generic type for model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with generic operations.

    Provides async database operations for any SQLAlchemy model.

    Type Parameters:
        ModelType: SQLAlchemy model class

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, session: AsyncSession):
                super().__init__(User, session)
    """

    def __init__(
        self, model: type[ModelType], session: AsyncSession
    ) -> None:
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def get_by(
        self, **filters: Any
    ) -> ModelType | None:
        """
        Get single entity by filters.

        Args:
            **filters: Column filters

        Returns:
            First matching entity or None
        """
        stmt = select(self.model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching filters.

        Args:
            **filters: Column filters

        Returns:
            Count of matching entities
        """
        stmt = select(func.count()).select_from(self.model)

        if filters:
            stmt = stmt.filter_by(**filters)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    def _insert(self):
        """Dialect specific INSERT supporting ON CONFLICT."""
        dialect = self.session.bind.dialect.name
        if dialect == "sqlite":
            return sqlite_insert(self.model)
        return pg_insert(self.model)

    async def insert_ignore(
        self,
        conflict_columns: list[str],
        **data: Any,
    ) -> bool:
        """
        Insert a row unless its natural key already exists.

        Args:
            conflict_columns: Columns of the unique natural key
            **data: Row values

        Returns:
            True if a row was inserted, False if it already existed
        """
        stmt = (
            self._insert()
            .values(**data)
            .on_conflict_do_nothing(index_elements=conflict_columns)
            .returning(self.model.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
