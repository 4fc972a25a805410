"""
Generic resource service.

`ResourceService` implements the operations every resource kind shares:
create, get, list, related listings, update, delete, disable and enable.
Each operation runs the lifecycle guard first, then the ownership policy,
and only then touches the repository. Per-kind services subclass it and
override the `prepare_*`/`after_*` hooks for their specifics.
"""

import logging
from typing import Any, Dict, Generic, List, NamedTuple, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from paperbook_backend.business_logic.lifecycle import (
    require_active,
    require_disableable,
    require_enableable,
)
from paperbook_backend.exceptions import BadRequestException, ForbiddenException
from paperbook_backend.interfaces.base import EntityInterface, ListQuery
from paperbook_backend.permissions.ownership import has_permission
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Columns no patch may touch
IMMUTABLE_FIELDS = {"id", "is_active", "created_at", "updated_at"}


class Relation(NamedTuple):
    """
    A child listing reachable from a parent resource.

    Attributes:
        service: Service of the child kind
        foreign_key: Column on the child pointing at the parent id
        public: Skip the ownership check on the parent
    """
    service: "ResourceService"
    foreign_key: str
    public: bool = False


class ResourceService(Generic[T]):
    """
    Ownership and lifecycle aware operations for one resource kind.

    Class attributes:
        interface: EntityInterface of the kind
        public_read: `get` skips the ownership check
        public_list: `list` is not narrowed to the caller's own resources
    """

    interface: Type[EntityInterface] = None
    public_read: bool = False
    public_list: bool = False

    def __init__(self, repository: ResourceRepository[T]):
        self.repository = repository
        self.relations: Dict[str, Relation] = {}

    def add_relation(self, name: str, service: "ResourceService", foreign_key: str, public: bool = False) -> None:
        self.relations[name] = Relation(service, foreign_key, public)

    @property
    def kind(self) -> str:
        return self.interface.kind_name()

    @property
    def owner_field(self) -> Optional[str]:
        return self.interface.model.__owner_field__

    @property
    def owned(self) -> bool:
        """Whether ownership resolves to a user, directly or through a parent."""
        return self.owner_field is not None

    # ------------------------------------------------------------------
    # Guard helpers
    # ------------------------------------------------------------------

    def load_active(self, entity_id: Any, for_update: bool = False) -> T:
        """Fetch an entity that must exist and be active."""
        return require_active(
            self.repository.find_by_id(entity_id, for_update=for_update),
            entity_id,
            self.kind,
        )

    def authorize(self, resource: T, principal: Principal) -> None:
        """
        Ownership check applied after the lifecycle guard.

        Ownerless kinds are only reachable through role-gated routes, so
        there is no per-record owner to compare against.
        """
        if not self.owned:
            return
        if principal is None or not has_permission(resource.owner_id, principal):
            logger.warning(f"{principal or 'anonymous'} denied access to {self.kind} {resource.id}")
            raise ForbiddenException(
                detail=f"You have no permission to access {self.kind} '{resource.id}'",
                user_id=principal.user_id if principal is not None else None,
                context={"entity_id": resource.id, "entity_type": self.kind},
            )

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        """Stamp the owner from the caller on kinds with a direct owner column."""
        if self.owner_field not in (None, "id"):
            if principal is None:
                raise BadRequestException(detail=f"Creating a {self.kind} requires an authenticated caller")
            data[self.owner_field] = principal.user_id
        return data

    def build(self, data: Dict[str, Any]) -> T:
        return self.interface.model(**data)

    def after_create(self, resource: T, principal: Optional[Principal]) -> T:
        return resource

    def prepare_update(self, resource: T, data: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
        return data

    def after_update(self, resource: T) -> T:
        return resource

    def after_delete(self, resource: T) -> None:
        pass

    def after_state_change(self, resource: T) -> T:
        return resource

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, payload: BaseModel, principal: Optional[Principal] = None) -> T:
        data = payload.model_dump() if isinstance(payload, BaseModel) else dict(payload)
        data = self.prepare_create(data, principal)

        resource = self.repository.insert(self.build(data))
        logger.info(f"Created {self.kind} {resource.id}")

        return self.after_create(resource, principal)

    def get(self, entity_id: Any, principal: Optional[Principal] = None) -> T:
        resource = self.load_active(entity_id)
        if not self.public_read:
            self.authorize(resource, principal)
        return resource

    def list(self, principal: Optional[Principal], query: Optional[ListQuery] = None) -> Tuple[List[T], int]:
        """
        List active resources matching the query filters.

        Non-admin callers see only what they own unless the kind is
        publicly listable.
        """
        query = query or self.interface.query()
        filters = query.to_filters()
        filters["is_active"] = True

        if self.owned and not self.public_list and (principal is None or not principal.is_admin):
            if principal is None:
                raise BadRequestException(detail=f"Listing {self.kind} requires an authenticated caller")
            filters["owner_id"] = principal.user_id

        return self.repository.find_many(filters, skip=query.skip or 0, limit=query.limit)

    def list_for(self, foreign_key: str, parent_id: Any, query: Optional[ListQuery] = None) -> Tuple[List[T], int]:
        """List active resources belonging to a parent, without owner narrowing."""
        query = query or self.interface.query()
        filters = query.to_filters()
        filters[foreign_key] = parent_id
        filters["is_active"] = True
        return self.repository.find_many(filters, skip=query.skip or 0, limit=query.limit)

    def get_related(
        self,
        entity_id: Any,
        related_kind: str,
        principal: Optional[Principal] = None,
        query: Optional[ListQuery] = None,
    ) -> Tuple[List[Any], int]:
        """
        List the children of kind `related_kind` of an active parent.

        The parent goes through the same guard sequence as `get`; the
        listing itself is delegated to the child kind's service.
        """
        relation = self.relations.get(related_kind)
        if relation is None:
            raise ValueError(f"{self.kind} has no relation '{related_kind}'")

        resource = self.load_active(entity_id)
        if not relation.public:
            self.authorize(resource, principal)

        return relation.service.list_for(relation.foreign_key, resource.id, query)

    def update(self, entity_id: Any, principal: Principal, patch: BaseModel) -> T:
        resource = self.load_active(entity_id, for_update=True)
        self.authorize(resource, principal)

        data = patch.model_dump(exclude_unset=True) if isinstance(patch, BaseModel) else dict(patch)
        for field in IMMUTABLE_FIELDS | {self.owner_field}:
            data.pop(field, None)

        data = self.prepare_update(resource, data, principal)
        if not data:
            return resource

        resource = self.repository.update_fields(resource.id, data)
        logger.info(f"Updated {self.kind} {resource.id}: {sorted(data.keys())}")

        return self.after_update(resource)

    def delete(self, entity_id: Any, principal: Principal) -> None:
        resource = self.load_active(entity_id, for_update=True)
        self.authorize(resource, principal)

        self.repository.delete(resource.id)
        logger.info(f"Deleted {self.kind} {entity_id}")

        self.after_delete(resource)

    def disable(self, entity_id: Any, principal: Principal) -> T:
        resource = require_disableable(
            self.repository.find_by_id(entity_id, for_update=True), entity_id, self.kind
        )
        self.authorize(resource, principal)

        resource = self.repository.update_fields(resource.id, {"is_active": False})
        logger.info(f"Disabled {self.kind} {entity_id} by {principal}")

        return self.after_state_change(resource)

    def enable(self, entity_id: Any, principal: Principal) -> T:
        resource = require_enableable(
            self.repository.find_by_id(entity_id, for_update=True), entity_id, self.kind
        )
        self.authorize(resource, principal)

        resource = self.repository.update_fields(resource.id, {"is_active": True})
        logger.info(f"Enabled {self.kind} {entity_id} by {principal}")

        return self.after_state_change(resource)
