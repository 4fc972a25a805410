"""Business logic for the product catalog."""

from typing import Any, Dict, Optional

from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.interfaces.product import ProductInterface
from paperbook_backend.model.product import Product
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository


class ProductService(ResourceService[Product]):
    """
    Products have no owner. Anyone may read them; mutations are reachable
    only through routes gated to admins and sellers. The creating seller is
    recorded in `user_id`.

    Carts holding a product are repriced whenever its price or state
    changes, or when it is deleted.
    """

    interface = ProductInterface
    public_read = True
    public_list = True

    def __init__(self, repository: ResourceRepository[Product]):
        super().__init__(repository)
        # Set by ProductGroupService
        self.product_groups = None

    def _refresh_carts(self, cart_ids) -> None:
        if self.product_groups is not None:
            self.product_groups.refresh_carts(cart_ids)

    def _carts_holding(self, product_id: Any):
        if self.product_groups is None:
            return []
        return self.product_groups.carts_holding(product_id)

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        data["user_id"] = principal.user_id if principal is not None else None
        return data

    def prepare_update(self, resource: Product, data: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
        data.pop("user_id", None)
        return data

    def after_update(self, resource: Product) -> Product:
        self._refresh_carts(self._carts_holding(resource.id))
        return resource

    def after_state_change(self, resource: Product) -> Product:
        self._refresh_carts(self._carts_holding(resource.id))
        return resource

    def delete(self, entity_id: Any, principal: Principal) -> None:
        # Groups go with the product, so collect their carts first
        cart_ids = self._carts_holding(entity_id)
        super().delete(entity_id, principal)
        self._refresh_carts(cart_ids)
