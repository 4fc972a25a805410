"""Ownership rule shared by every resource kind."""

from typing import Any, Optional

from paperbook_backend.permissions.principal import Principal


def has_permission(resource_owner_id: Optional[Any], principal: Principal) -> bool:
    """
    True when the caller owns the resource or is an admin.

    Ownerless resources pass `None`, which only an admin satisfies.
    """
    if principal.is_admin:
        return True
    return resource_owner_id is not None and resource_owner_id == principal.user_id
