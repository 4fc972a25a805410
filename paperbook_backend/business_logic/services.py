"""Per-request wiring of repositories and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from paperbook_backend.business_logic.addresses import AddressService
from paperbook_backend.business_logic.orders import OrderService
from paperbook_backend.business_logic.products import ProductService
from paperbook_backend.business_logic.ratings import RatingService
from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.business_logic.shopping_carts import ProductGroupService, ShoppingCartService
from paperbook_backend.business_logic.users import UserService
from paperbook_backend.database import get_db
from paperbook_backend.model import Address, Order, Product, Rating, ShoppingCart, User
from paperbook_backend.repositories import ProductGroupRepository, SqlAlchemyRepository


@dataclass
class Services:
    users: UserService
    addresses: AddressService
    products: ProductService
    orders: OrderService
    ratings: RatingService
    shopping_carts: ShoppingCartService
    product_groups: ProductGroupService

    def for_endpoint(self, endpoint: str) -> ResourceService:
        return getattr(self, endpoint.replace("-", "_"))


def build_services(db: Session) -> Services:
    addresses = AddressService(SqlAlchemyRepository(db, Address))
    products = ProductService(SqlAlchemyRepository(db, Product))
    ratings = RatingService(SqlAlchemyRepository(db, Rating), products=products)
    products.add_relation("ratings", ratings, "product_id", public=True)
    orders = OrderService(SqlAlchemyRepository(db, Order), products=products)
    shopping_carts = ShoppingCartService(SqlAlchemyRepository(db, ShoppingCart), products=products)
    product_groups = ProductGroupService(
        ProductGroupRepository(db),
        shopping_carts=shopping_carts,
        products=products,
    )
    users = UserService(
        SqlAlchemyRepository(db, User),
        addresses=addresses,
        orders=orders,
        products=products,
        ratings=ratings,
        shopping_carts=shopping_carts,
    )

    return Services(
        users=users,
        addresses=addresses,
        products=products,
        orders=orders,
        ratings=ratings,
        shopping_carts=shopping_carts,
        product_groups=product_groups,
    )


def get_services(db: Annotated[Session, Depends(get_db)]) -> Services:
    """FastAPI dependency: services bound to the request's session."""
    return build_services(db)
