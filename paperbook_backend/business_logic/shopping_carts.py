"""
Business logic for shopping carts and their product groups.

A cart's price is derived: the sum of product price times amount over the
cart's active product groups whose product is active. Every change to a
product group, and every price, state or deletion change of a product,
recomputes the price of the carts involved.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from paperbook_backend.business_logic.products import ProductService
from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.interfaces.shopping_cart import ProductGroupInterface, ShoppingCartInterface
from paperbook_backend.model.shopping_cart import ProductGroup, ShoppingCart
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository

logger = logging.getLogger(__name__)


def cart_total(groups: Iterable[ProductGroup]) -> float:
    """Sum of price times amount; callers pass only the active groups."""
    total = sum(
        group.product.price * group.amount
        for group in groups
        if group.product is not None and group.product.is_active
    )
    return round(total, 2)


class ShoppingCartService(ResourceService[ShoppingCart]):

    interface = ShoppingCartInterface

    def __init__(self, repository: ResourceRepository[ShoppingCart], products: ProductService):
        super().__init__(repository)
        self.products = products

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        data = super().prepare_create(data, principal)

        groups = []
        for item in data.pop("product_groups", None) or []:
            product = self.products.load_active(item["product_id"])
            groups.append(ProductGroup(product=product, amount=item["amount"]))

        data["product_groups"] = groups
        data["price"] = cart_total(groups)
        return data

    def prepare_update(self, resource: ShoppingCart, data: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
        if data.get("price") is None:
            data.pop("price", None)
        return data

    def after_state_change(self, resource: ShoppingCart) -> ShoppingCart:
        # Products may have changed while the cart was disabled
        if resource.is_active:
            return self.recompute_price(resource.id, resource.active_product_groups)
        return resource

    def recompute_price(self, cart_id: Any, groups: Iterable[ProductGroup]) -> ShoppingCart:
        price = cart_total(groups)
        logger.debug(f"Shopping cart {cart_id} price is now {price}")
        return self.repository.update_fields(cart_id, {"price": price})


class ProductGroupService(ResourceService[ProductGroup]):
    """Cart line items; ownership is inherited from the cart."""

    interface = ProductGroupInterface

    def __init__(
        self,
        repository: ResourceRepository[ProductGroup],
        shopping_carts: ShoppingCartService,
        products: ProductService,
    ):
        super().__init__(repository)
        self.shopping_carts = shopping_carts
        self.products = products
        shopping_carts.add_relation("product-groups", self, "shopping_cart_id")
        products.product_groups = self

    @property
    def owned(self) -> bool:
        return True

    def _refresh_cart_price(self, cart_id: Any) -> None:
        groups, _ = self.repository.find_many({"shopping_cart_id": cart_id, "is_active": True})
        self.shopping_carts.recompute_price(cart_id, groups)

    def carts_holding(self, product_id: Any) -> List[Any]:
        """Ids of the active carts with an active group of `product_id`."""
        groups, _ = self.repository.find_many({"product_id": product_id, "is_active": True})
        return sorted({group.shopping_cart_id for group in groups})

    def refresh_carts(self, cart_ids: Iterable[Any]) -> None:
        for cart_id in cart_ids:
            self._refresh_cart_price(cart_id)

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        # The caller must be able to access the target cart
        self.shopping_carts.get(data["shopping_cart_id"], principal)
        self.products.load_active(data["product_id"])
        return data

    def after_create(self, resource: ProductGroup, principal: Optional[Principal]) -> ProductGroup:
        self._refresh_cart_price(resource.shopping_cart_id)
        return resource

    def after_update(self, resource: ProductGroup) -> ProductGroup:
        self._refresh_cart_price(resource.shopping_cart_id)
        return resource

    def after_state_change(self, resource: ProductGroup) -> ProductGroup:
        self._refresh_cart_price(resource.shopping_cart_id)
        return resource

    def after_delete(self, resource: ProductGroup) -> None:
        self._refresh_cart_price(resource.shopping_cart_id)
