"""Generic CRUD repository shared by the entity repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import and_, select

from postboard_backend.database.base import BaseSchema

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

SchemaT = TypeVar("SchemaT", bound=BaseSchema)


class SqlAlchemyRepository(Generic[SchemaT]):
    """CRUD-by-identifier plus predicate lookups for one schema class."""

    schema: type[SchemaT]

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[SchemaT]:
        """Return every row ordered by identifier."""
        stmt = select(self.schema).order_by(self.schema.id)
        return list(self._session.scalars(stmt))

    def get_by_id(self, entity_id: int) -> SchemaT | None:
        """Return the entity with *entity_id* or ``None``."""
        return self._session.get(self.schema, entity_id)

    def find_by(self, **values: Any) -> list[SchemaT]:
        """Return rows whose named columns equal the given values."""
        stmt = select(self.schema).filter_by(**values).order_by(self.schema.id)
        return list(self._session.scalars(stmt))

    def find_where(self, conditions: Sequence[ColumnElement[bool]]) -> list[SchemaT]:
        """Return rows matching all *conditions*; no conditions means every row."""
        stmt = select(self.schema)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return list(self._session.scalars(stmt.order_by(self.schema.id)))

    def add(self, entity: SchemaT) -> SchemaT:
        """Insert *entity* and load store-assigned values."""
        self._session.add(entity)
        self._session.flush()
        self._session.refresh(entity)
        return entity

    def save(self, entity: SchemaT) -> SchemaT:
        """Flush pending changes of an entity already attached to the session."""
        self._session.flush()
        self._session.refresh(entity)
        return entity

    def delete(self, entity: SchemaT) -> None:
        """Remove *entity* from the store."""
        self._session.delete(entity)
        self._session.flush()
