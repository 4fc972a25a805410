"""
Repository layer for storage access.

Each resource kind is stored through a `ResourceRepository`; the SQLAlchemy
implementation is shared by every kind except product groups, whose owner
lives on the parent shopping cart.
"""

from .base import ResourceRepository, SqlAlchemyRepository
from .product_group import ProductGroupRepository

__all__ = [
    "ResourceRepository",
    "SqlAlchemyRepository",
    "ProductGroupRepository",
]
