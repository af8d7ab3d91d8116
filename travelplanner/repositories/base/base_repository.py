"""
Base repository with standardized CRUD operations and error handling.

Provides the foundation for all domain repositories. Repositories never
commit: the owning service decides the transaction boundary, so writes
here only flush.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import (
    RepositoryError,
    handle_database_exception,
)
from travelplanner.core.logging import get_logger
from travelplanner.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over a single mapped model.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add an entity to the session and flush it.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            ForeignKeyViolationError: If a referenced row is missing
            RepositoryError: For any other database failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
            logger.debug(
                f"Created {self.model.__name__}",
                extra={"entity_id": entity.id, "table": self.table_name},
            )
            return entity
        except IntegrityError as e:
            raise handle_database_exception(e, self.table_name) from e
        except SQLAlchemyError as e:
            raise RepositoryError("Create failed", table=self.table_name) from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError("Find by ID failed", table=self.table_name) from e

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = 100,
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs
            skip: Number of records to skip
            limit: Maximum number of records (None for no limit)
            order_by: List of fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        try:
            stmt = select(self.model).where(*self._criteria_clauses(criteria))

            for field in order_by or []:
                if field.startswith("-"):
                    stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
                else:
                    stmt = stmt.order_by(getattr(self.model, field))

            stmt = stmt.offset(skip)
            if limit is not None:
                stmt = stmt.limit(limit)

            return list(self.db.execute(stmt).unique().scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError("Find by criteria failed", table=self.table_name) from e

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        results = self.find_by_criteria(criteria, limit=1)
        return results[0] if results else None

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        """Count entities matching criteria."""
        try:
            stmt = (
                select(func.count())
                .select_from(self.model)
                .where(*self._criteria_clauses(criteria or {}))
            )
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise RepositoryError("Count failed", table=self.table_name) from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Delete an entity (ORM cascades apply) and flush."""
        try:
            self.db.delete(entity)
            self.db.flush()
            logger.debug(
                f"Deleted {self.model.__name__}",
                extra={"entity_id": entity.id, "table": self.table_name},
            )
        except IntegrityError as e:
            raise handle_database_exception(e, self.table_name) from e
        except SQLAlchemyError as e:
            raise RepositoryError("Delete failed", table=self.table_name) from e

    # ==================== Helpers ====================

    def _criteria_clauses(self, criteria: Dict[str, Any]) -> Sequence[Any]:
        clauses = []
        for key, value in criteria.items():
            if not hasattr(self.model, key):
                continue
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return clauses
