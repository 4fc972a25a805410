"""Business logic for users."""

import logging
from typing import Any, Dict, Optional

from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.exceptions import RoleRequiredException, WeakPasswordException
from paperbook_backend.interfaces.roles import Role
from paperbook_backend.interfaces.user import UserInterface
from paperbook_backend.model.auth import User
from paperbook_backend.password_utils import (
    PasswordValidationError,
    create_password_hash,
    hash_password,
)
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository

logger = logging.getLogger(__name__)


def _hash_checked_password(password: str, name: Optional[str], email: Optional[str]) -> str:
    try:
        return create_password_hash(password, name=name, email=email)
    except PasswordValidationError as e:
        raise WeakPasswordException(detail=e.message, reason=e.code)


class UserService(ResourceService[User]):
    """
    Users own themselves. Passwords are validated and hashed before they
    reach the repository; the hash never leaves the service in a response
    model. Related listings delegate to the services of the child kinds.
    """

    interface = UserInterface

    def __init__(
        self,
        repository: ResourceRepository[User],
        addresses: Optional[ResourceService] = None,
        orders: Optional[ResourceService] = None,
        products: Optional[ResourceService] = None,
        ratings: Optional[ResourceService] = None,
        shopping_carts: Optional[ResourceService] = None,
    ):
        super().__init__(repository)
        if addresses is not None:
            self.add_relation("addresses", addresses, "user_id")
        if orders is not None:
            self.add_relation("orders", orders, "user_id")
        if products is not None:
            # Anyone may browse what a seller offers
            self.add_relation("products", products, "user_id", public=True)
        if ratings is not None:
            self.add_relation("ratings", ratings, "user_id")
        if shopping_carts is not None:
            self.add_relation("shopping-carts", shopping_carts, "user_id")

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        role = data.get("role") or Role.user.value
        if isinstance(role, Role):
            role = role.value

        if role == Role.admin.value and (principal is None or not principal.is_admin):
            logger.warning(f"Refused admin sign-up for '{data.get('email')}' by {principal or 'anonymous'}")
            raise RoleRequiredException(
                detail="Only admins may create admin users",
                required_roles=[Role.admin.value],
            )

        data["role"] = role
        data["password"] = _hash_checked_password(data["password"], data.get("name"), data.get("email"))
        return data

    def prepare_update(self, resource: User, data: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
        if data.get("password") is not None:
            data["password"] = _hash_checked_password(
                data["password"],
                data.get("name", resource.name),
                data.get("email", resource.email),
            )
        else:
            data.pop("password", None)
        return data

    def find_by_email(self, email: str) -> Optional[User]:
        users, _ = self.repository.find_many({"email": email}, limit=1)
        return users[0] if users else None

    def ensure_admin(self, name: str, email: str, password: str) -> User:
        """Create the bootstrap admin unless a user with that email exists."""
        existing = self.find_by_email(email)
        if existing is not None:
            return existing

        user = self.repository.insert(User(
            name=name,
            email=email,
            password=hash_password(password),
            role=Role.admin.value,
        ))
        logger.info(f"Created bootstrap admin {user.id} ({email})")
        return user
