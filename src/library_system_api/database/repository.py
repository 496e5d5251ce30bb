"""
Repository pattern implementation for the Library System API.

Request handlers never touch SQLAlchemy directly. Each entity has a
repository built on ``BaseRepository``, which supplies the operations every
entity shares:

1. **find-by-id**: returns the record or ``None``; absence is not an error
2. **find-all**: returns an ordered list, possibly empty
3. **exists**: plain boolean
4. **create**: inserts a validated record and returns it with its new id
5. **update**: replaces every field of an existing row (last write wins)
6. **delete**: returns whether a row was removed

Reads return Pydantic models so handlers can hand them straight to FastAPI.
Driver failures surface as ``PersistenceError`` (see ``session.safe_query``).
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import (
    DuplicateError,
    PersistenceError,
    RepositoryException,
)
from .schema import Base
from .session import safe_commit, safe_query

ModelType = TypeVar("ModelType", bound=Base)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)

__all__ = [
    "BaseRepository",
    "DuplicateError",
    "PersistenceError",
    "RepositoryException",
]


class BaseRepository(ABC, Generic[ModelType, ResponseSchemaType]):
    """
    Abstract base repository providing common CRUD operations.

    Subclasses name the ORM class, the Pydantic detail schema and the
    primary key column; everything else is shared.
    """

    def __init__(self, session: Session):
        """Initialize repository with database session."""
        self.session = session

    @property
    @abstractmethod
    def model_class(self) -> type[ModelType]:
        """Return the SQLAlchemy model class."""

    @property
    @abstractmethod
    def response_schema(self) -> type[ResponseSchemaType]:
        """Return the Pydantic response schema."""

    @property
    @abstractmethod
    def id_field(self) -> str:
        """Name of the primary key attribute, shared by ORM class and schema."""

    @property
    def entity_name(self) -> str:
        return self.model_class.__name__

    def _id_column(self):
        return getattr(self.model_class, self.id_field)

    def _to_response_model(self, db_obj: ModelType) -> ResponseSchemaType:
        """Convert database model to Pydantic response model."""
        return self.response_schema.model_validate(db_obj, from_attributes=True)

    def _fetch(self, id: int) -> ModelType | None:
        query = select(self.model_class).where(self._id_column() == id).execution_options(
            populate_existing=True
        )
        return safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            f"Failed to get {self.entity_name} by ID",
        )

    def _column_values(self, data: BaseModel) -> dict[str, Any]:
        """Fields of ``data`` that map onto table columns, minus the primary key."""
        columns = set(self.model_class.__table__.columns.keys())
        return {
            key: value
            for key, value in data.model_dump().items()
            if key in columns and key != self.id_field
        }

    def get_by_id(self, id: int) -> ResponseSchemaType | None:
        """
        Get entity by ID.

        Returns:
            Pydantic model or None if not found

        Raises:
            PersistenceError: On database errors
        """
        db_obj = self._fetch(id)
        if db_obj is None:
            return None
        return self._to_response_model(db_obj)

    def get_all(self) -> list[ResponseSchemaType]:
        """Get all entities ordered by primary key."""
        query = select(self.model_class).order_by(self._id_column()).execution_options(
            populate_existing=True
        )
        results = safe_query(
            self.session,
            lambda s: s.execute(query).scalars().all(),
            f"Failed to list {self.entity_name} rows",
        )
        return [self._to_response_model(item) for item in results]

    def exists(self, id: int) -> bool:
        """Check if entity exists by ID."""
        query = select(func.count()).select_from(self.model_class).where(self._id_column() == id)
        count = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check existence"
        )
        return bool(count)

    def create(self, data: BaseModel, **extra: Any) -> ResponseSchemaType:
        """
        Insert a new row and return it with its store-assigned id.

        Args:
            data: Validated record; its id field is ignored
            extra: Column values not carried by the schema (e.g. foreign keys)

        Raises:
            DuplicateError: If a unique or foreign key constraint rejects the row
            PersistenceError: On other database errors
        """
        db_obj = self.model_class(**self._column_values(data), **extra)
        try:
            self.session.add(db_obj)
            self.session.commit()
            self.session.refresh(db_obj)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError(f"{self.entity_name} violates a constraint: {e.orig!s}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Failed to create {self.entity_name}: {e!s}") from e
        return self._to_response_model(db_obj)

    def update(self, id: int, data: BaseModel) -> bool:
        """
        Replace every column of an existing row with the values in ``data``.

        Re-sending the same payload leaves the row unchanged, so a failed
        update can be retried safely.

        Returns:
            True if a row was updated, False if none has this id
        """
        values = self._column_values(data)
        statement = update(self.model_class).where(self._id_column() == id).values(**values)
        try:
            result = self.session.execute(statement)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError(f"{self.entity_name} violates a constraint: {e.orig!s}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Failed to update {self.entity_name}: {e!s}") from e
        safe_commit(self.session, f"update {self.entity_name}")
        return result.rowcount > 0

    def delete(self, id: int) -> bool:
        """
        Delete entity by ID.

        Returns:
            True if deleted, False if not found
        """
        statement = delete(self.model_class).where(self._id_column() == id)
        try:
            result = self.session.execute(statement)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError(f"{self.entity_name} is still referenced: {e.orig!s}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Failed to delete {self.entity_name}: {e!s}") from e
        safe_commit(self.session, f"delete {self.entity_name}")
        return result.rowcount > 0

    def _set_columns(self, id: int, operation: str, **values: Any) -> bool:
        """Single-row field update used by the state transitions."""
        statement = update(self.model_class).where(self._id_column() == id).values(**values)
        result = safe_query(
            self.session, lambda s: s.execute(statement), f"Failed to {operation}"
        )
        safe_commit(self.session, operation)
        return result.rowcount > 0
