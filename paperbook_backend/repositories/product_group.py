from typing import Any
from sqlalchemy.orm import Session

from paperbook_backend.model.shopping_cart import ProductGroup, ShoppingCart
from paperbook_backend.repositories.base import SqlAlchemyRepository


class ProductGroupRepository(SqlAlchemyRepository[ProductGroup]):
    """
    Product groups are owned through their shopping cart.

    Groups of a disabled cart are not found by any lookup, so they can be
    neither read nor changed until the cart is enabled again.
    """

    def __init__(self, db: Session):
        super().__init__(db, ProductGroup)

    def base_query(self):
        return self.db.query(ProductGroup).filter(
            ProductGroup.shopping_cart.has(ShoppingCart.is_active.is_(True))
        )

    def owner_criterion(self, owner_id: Any):
        return ProductGroup.shopping_cart.has(ShoppingCart.user_id == owner_id)
