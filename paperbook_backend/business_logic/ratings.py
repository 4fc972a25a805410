"""Business logic for product ratings."""

from typing import Any, Dict, Optional

from paperbook_backend.business_logic.products import ProductService
from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.interfaces.rating import RatingInterface
from paperbook_backend.model.rating import Rating
from paperbook_backend.permissions.principal import Principal
from paperbook_backend.repositories.base import ResourceRepository


class RatingService(ResourceService[Rating]):
    """
    Ratings belong to their author. Listing is public so shoppers can read
    reviews; a single rating is read under the ownership rule.
    """

    interface = RatingInterface
    public_list = True

    def __init__(self, repository: ResourceRepository[Rating], products: ProductService):
        super().__init__(repository)
        self.products = products

    def prepare_create(self, data: Dict[str, Any], principal: Optional[Principal]) -> Dict[str, Any]:
        self.products.load_active(data["product_id"])
        return super().prepare_create(data, principal)
