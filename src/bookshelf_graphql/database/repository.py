"""
Repository pattern implementation for the Bookshelf GraphQL service.

Repositories keep SQLAlchemy out of the resolvers:

1. **Separation**: resolvers deal in Pydantic models, never ORM rows
2. **Testability**: repositories run against an in-memory SQLite database
3. **Error translation**: integrity violations surface as ``DuplicateError``,
   every other database failure as ``RepositoryException``

Each public method performs at most one commit, so each mutation is a single
atomic database operation.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..observability import trace_repository_operation
from .schema import Base
from .session import safe_commit, safe_query

ModelType = TypeVar("ModelType", bound=Base)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)

# Largest value an INTEGER primary key can hold; larger ids cannot exist
MAX_ROW_ID = 2**63 - 1


class RepositoryException(Exception):
    """Base exception for repository operations."""


class DuplicateError(RepositoryException):
    """Raised when attempting to create a duplicate entity."""


class BaseRepository(ABC, Generic[ModelType, ResponseSchemaType]):
    """
    Abstract base repository providing the create / read / delete operations
    shared by every table.
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
    def _name(self) -> str:
        return self.model_class.__name__

    def _to_response_model(self, db_obj: ModelType) -> ResponseSchemaType:
        """Convert database model to Pydantic response model."""
        return self.response_schema.model_validate(db_obj, from_attributes=True)

    def get_by_id(self, id: int) -> ResponseSchemaType | None:
        """
        Get entity by ID.

        Returns:
            Pydantic model or None if not found
        """
        if not 1 <= id <= MAX_ROW_ID:
            return None
        query = select(self.model_class).where(self.model_class.id == id)
        with trace_repository_operation(self._name, "get_by_id", self.model_class.__tablename__):
            db_obj = safe_query(
                self.session,
                lambda s: s.execute(query).scalar_one_or_none(),
                f"Failed to get {self._name} by ID",
            )

        if db_obj is None:
            return None
        return self._to_response_model(db_obj)

    def get_all(self) -> list[ResponseSchemaType]:
        """
        Get all entities in insertion order.

        Returns:
            List of entities, empty when the table is empty
        """
        query = select(self.model_class).order_by(self.model_class.id.asc())
        with trace_repository_operation(
            self._name, "get_all", self.model_class.__tablename__
        ) as span:
            results = safe_query(
                self.session,
                lambda s: s.execute(query).scalars().all(),
                f"Failed to list {self._name}",
            )
            span.set_attribute("db.row_count", len(results))
        return [self._to_response_model(item) for item in results]

    def _create(self, **values) -> ResponseSchemaType:
        """
        Insert one row and return it.

        Raises:
            DuplicateError: If a unique constraint is violated
            RepositoryException: On other database errors
        """
        with trace_repository_operation(self._name, "create", self.model_class.__tablename__):
            try:
                db_obj = self.model_class(**values)
                self.session.add(db_obj)
                safe_commit(self.session, f"create {self._name}")
                self.session.refresh(db_obj)
                return self._to_response_model(db_obj)
            except IntegrityError as e:
                self.session.rollback()
                raise DuplicateError(f"{self._name} already exists") from e
            except SQLAlchemyError as e:
                self.session.rollback()
                raise RepositoryException(f"Database error: {e!s}") from e

    def delete(self, id: int) -> bool:
        """
        Delete entity by ID.

        Returns:
            True if a row was deleted, False if none existed

        Raises:
            RepositoryException: On database errors
        """
        if not 1 <= id <= MAX_ROW_ID:
            return False
        with trace_repository_operation(self._name, "delete", self.model_class.__tablename__):
            try:
                db_obj = safe_query(
                    self.session,
                    lambda s: s.get(self.model_class, id),
                    f"Failed to get {self._name} for deletion",
                )
                if db_obj is None:
                    return False

                self.session.delete(db_obj)
                safe_commit(self.session, f"delete {self._name}")
                return True
            except SQLAlchemyError as e:
                self.session.rollback()
                raise RepositoryException(f"Delete failed: {e!s}") from e

    def exists(self, id: int) -> bool:
        """Check if entity exists by ID."""
        if not 1 <= id <= MAX_ROW_ID:
            return False
        query = select(func.count()).select_from(self.model_class).where(self.model_class.id == id)
        count = safe_query(self.session, lambda s: s.execute(query).scalar(), "Failed to check existence")
        return bool(count)

    def count(self) -> int:
        """Number of rows in the table."""
        query = select(func.count()).select_from(self.model_class)
        return safe_query(self.session, lambda s: s.execute(query).scalar(), "Failed to count") or 0
