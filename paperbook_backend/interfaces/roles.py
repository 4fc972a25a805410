from enum import Enum


class Role(str, Enum):
    """Closed set of caller roles."""
    admin = "admin"
    seller = "seller"
    user = "user"


# Roles allowed to manage the product catalog
CATALOG_MANAGERS = (Role.admin, Role.seller)
