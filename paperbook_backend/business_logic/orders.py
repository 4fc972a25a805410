"""Business logic for orders."""

from typing import Any, Dict, Optional

from paperbook_backend.business_logic.products import ProductService
from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.interfaces.order import OrderInterface, OrderStatus
from paperbook_backend.model.order import Order
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository


class OrderService(ResourceService[Order]):
    """Orders belong to the buyer and must reference an active product."""

    interface = OrderInterface

    def __init__(self, repository: ResourceRepository[Order], products: ProductService):
        super().__init__(repository)
        self.products = products

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        self.products.load_active(data["product_id"])
        data = super().prepare_create(data, principal)
        data["status"] = OrderStatus.pending.value
        return data
