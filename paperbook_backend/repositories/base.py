"""
Repository pattern for resource storage.

Services talk to storage only through `ResourceRepository`; the SQLAlchemy
implementation works on the request-scoped session and only flushes, leaving
commit/rollback to the session owner (`get_db` or the caller). Database
errors are not translated here and propagate to the caller unchanged.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Dict, Any, Type, Tuple
from sqlalchemy.orm import Session

# Type variable for generic entity type
T = TypeVar('T')


class ResourceRepository(ABC, Generic[T]):
    """Abstract storage access for one resource kind."""

    @abstractmethod
    def find_by_id(self, entity_id: Any, for_update: bool = False) -> Optional[T]:
        """
        Fetch one entity regardless of its active flag.

        Args:
            entity_id: Entity identifier
            for_update: Lock the row for the rest of the transaction

        Returns:
            Entity instance or None
        """

    @abstractmethod
    def find_many(
        self,
        filters: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[T], int]:
        """
        Fetch a page of entities matching all equality filters.

        The special key `owner_id` constrains the entity's owner, whatever
        column or relation holds it.

        Returns:
            (page of entities, total number of matches)
        """

    @abstractmethod
    def insert(self, entity: T) -> T:
        """Persist a new entity and return it with generated fields populated."""

    @abstractmethod
    def update_fields(self, entity_id: Any, updates: Dict[str, Any]) -> T:
        """Apply a field-level patch and return the updated entity."""

    @abstractmethod
    def delete(self, entity_id: Any) -> None:
        """Remove the entity permanently."""


class SqlAlchemyRepository(ResourceRepository[T]):
    """ResourceRepository on top of a SQLAlchemy session."""

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def owner_criterion(self, owner_id: Any):
        """SQL criterion restricting results to entities owned by `owner_id`."""
        owner_field = self.model.__owner_field__
        if owner_field is None:
            raise ValueError(f"{self.model.__name__} has no owner")
        return getattr(self.model, owner_field) == owner_id

    def base_query(self):
        """Query every lookup starts from."""
        return self.db.query(self.model)

    def find_by_id(self, entity_id: Any, for_update: bool = False) -> Optional[T]:
        query = self.base_query().filter(self.model.id == entity_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_many(
        self,
        filters: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[T], int]:
        query = self.base_query()

        for key, value in filters.items():
            if key == "owner_id":
                query = query.filter(self.owner_criterion(value))
            elif hasattr(self.model, key):
                query = query.filter(getattr(self.model, key) == value)
            else:
                raise ValueError(f"{self.model.__name__} has no attribute '{key}'")

        total = query.order_by(None).count()

        query = query.order_by(self.model.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        return query.all(), total

    def insert(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def update_fields(self, entity_id: Any, updates: Dict[str, Any]) -> T:
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise LookupError(f"{self.model.__name__} with id {entity_id} not found")

        for key, value in updates.items():
            setattr(entity, key, value)

        self.db.flush()
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: Any) -> None:
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise LookupError(f"{self.model.__name__} with id {entity_id} not found")

        self.db.delete(entity)
        self.db.flush()
