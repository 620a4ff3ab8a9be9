"""
Base repository with generic CRUD operations.

Provides a reusable base class for all repositories with
common database operations.
"""

from typing import Any, Generic, NamedTuple, TypeVar

from sqlalchemy import ColumnElement, delete, func, insert, select
from sqlalchemy.orm import Session

from movie_catalog.database.models.base import Base

# Generic type variable bound to Base model
ModelT = TypeVar("ModelT", bound=Base)


class InsertedRow(NamedTuple):
    """Identity assigned by the store to one bulk-inserted row."""

    id: int
    source_id: str


class BaseRepository(Generic[ModelT]):
    """Generic repository providing common CRUD operations.

    Attributes:
        model: SQLAlchemy model class.
        session: Database session.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session

    def find_many(self, *criteria: ColumnElement[bool]) -> list[ModelT]:
        """Retrieve every entity matching all criteria, ordered by id.

        Args:
            *criteria: SQLAlchemy boolean expressions (none = all rows).

        Returns:
            List of entity instances.
        """
        stmt = select(self.model).where(*criteria).order_by(self.model.id)
        return list(self._session.scalars(stmt).all())

    def count(self) -> int:
        """Count total number of entities.

        Returns:
            Total count.
        """
        stmt = select(func.count()).select_from(self.model)
        result = self._session.execute(stmt).scalar()
        return result or 0

    def bulk_insert(self, rows: list[dict[str, Any]]) -> list[InsertedRow]:
        """Insert many rows in one statement and return their identities.

        Identities come back in the same order as ``rows``.

        Args:
            rows: Column values keyed by mapped attribute name.

        Returns:
            One InsertedRow per input row.
        """
        if not rows:
            return []

        stmt = insert(self.model).returning(
            self.model.id,
            self.model.source_id,
            sort_by_parameter_order=True,
        )
        result = self._session.execute(stmt, rows)
        self._session.flush()
        return [InsertedRow(id=row.id, source_id=row.source_id) for row in result]

    def delete_many(self, *criteria: ColumnElement[bool]) -> int:
        """Delete every entity matching all criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions (none = all rows).

        Returns:
            Number of deleted rows.
        """
        stmt = delete(self.model).where(*criteria)
        result = self._session.execute(stmt)
        self._session.flush()
        return result.rowcount or 0
