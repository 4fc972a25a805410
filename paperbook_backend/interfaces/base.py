"""
Base DTOs and the interface descriptor every resource kind provides.

An interface ties together the SQLAlchemy model, the Pydantic schemas used
for create/get/list/update and the list query that translates query-string
parameters into repository filters.
"""

from abc import ABC
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ListQuery(BaseModel):
    """
    Paging parameters plus per-kind equality filters.

    Subclasses declare their filterable fields as optional attributes; every
    attribute that is set becomes an equality constraint.
    """
    skip: Optional[int] = Field(0, ge=0)
    limit: Optional[int] = Field(100, ge=1, le=1000)

    def to_filters(self) -> Dict[str, Any]:
        """Translate the query into the filter dict consumed by repositories."""
        return self.model_dump(exclude={"skip", "limit"}, exclude_none=True)


class BaseEntityList(BaseModel):
    id: int = Field(description="Unique identifier")
    is_active: bool = Field(True, description="False once the entity was disabled")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Update timestamp")

    model_config = ConfigDict(from_attributes=True)


class BaseEntityGet(BaseEntityList):
    pass


class EntityInterface(ABC):
    """
    Describes one resource kind.

    Attributes:
        model: SQLAlchemy model class
        endpoint: API endpoint path (e.g., "users", "shopping-carts")
        create: Pydantic create payload
        get: Pydantic detail response
        list: Pydantic list item response
        update: Pydantic patch payload
        query: ListQuery subclass for list routes
    """
    model: Any = None
    endpoint: str = None

    create: BaseModel = None
    get: BaseModel = None
    list: BaseModel = None
    update: BaseModel = None
    query: BaseModel = ListQuery

    @classmethod
    def kind_name(cls) -> str:
        return cls.model.__name__ if cls.model is not None else cls.__name__
