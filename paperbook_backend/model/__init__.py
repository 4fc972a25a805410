from .base import Base, metadata, ResourceMixin
from .auth import User
from .address import Address
from .product import Product
from .order import Order
from .rating import Rating
from .shopping_cart import ShoppingCart, ProductGroup

# Import all models to ensure relationships are properly set up
from . import (
    auth,
    address,
    product,
    order,
    rating,
    shopping_cart,
)

__all__ = [
    'Base',
    'metadata',
    'ResourceMixin',
    'User',
    'Address',
    'Product',
    'Order',
    'Rating',
    'ShoppingCart',
    'ProductGroup',
]
