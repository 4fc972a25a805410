"""
Soft enable/disable lifecycle shared by every resource kind.

A stored resource is either active or inactive; deletion removes it for good.
Inactive resources are invisible to every operation except `enable`:

    ACTIVE   --disable-->  INACTIVE
    INACTIVE --enable-->   ACTIVE
    ACTIVE | INACTIVE --delete--> (gone)
"""

from typing import Any, Optional, TypeVar

from paperbook_backend.exceptions import (
    EntityAlreadyDisabledException,
    EntityAlreadyEnabledException,
    NotFoundException,
)

T = TypeVar('T')


def require_active(resource: Optional[T], entity_id: Any, entity_type: str) -> T:
    """Guard for get, list, related listings, update and delete."""
    if resource is None or not resource.is_active:
        raise NotFoundException(entity_id=entity_id, entity_type=entity_type)
    return resource


def require_disableable(resource: Optional[T], entity_id: Any, entity_type: str) -> T:
    if resource is None:
        raise NotFoundException(entity_id=entity_id, entity_type=entity_type)
    if not resource.is_active:
        raise EntityAlreadyDisabledException(entity_id=entity_id, entity_type=entity_type)
    return resource


def require_enableable(resource: Optional[T], entity_id: Any, entity_type: str) -> T:
    if resource is None:
        raise NotFoundException(entity_id=entity_id, entity_type=entity_type)
    if resource.is_active:
        raise EntityAlreadyEnabledException(entity_id=entity_id, entity_type=entity_type)
    return resource
