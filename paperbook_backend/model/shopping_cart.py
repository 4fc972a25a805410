from typing import List, Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class ShoppingCart(ResourceMixin, Base):
    __tablename__ = 'shopping_cart'
    __owner_field__ = 'user_id'

    # Sum of product price * amount over the cart's product groups
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0, server_default="0")
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    user = relationship('User', back_populates='shopping_carts')
    product_groups = relationship("ProductGroup", back_populates="shopping_cart", uselist=True, lazy="select", cascade="all, delete-orphan")

    @property
    def active_product_groups(self) -> List["ProductGroup"]:
        return [group for group in self.product_groups if group.is_active]


class ProductGroup(ResourceMixin, Base):
    """A product line inside a shopping cart; owned by whoever owns the cart."""
    __tablename__ = 'product_group'
    __table_args__ = (
        CheckConstraint("amount > 0", name='ck_product_group_amount_positive'),
    )

    amount = Column(Integer, nullable=False, default=1, server_default="1")
    product_id = Column(ForeignKey('product.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    shopping_cart_id = Column(ForeignKey('shopping_cart.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    product = relationship('Product', back_populates='product_groups')
    shopping_cart = relationship('ShoppingCart', back_populates='product_groups')

    @property
    def owner_id(self) -> Optional[int]:
        if self.shopping_cart is None:
            return None
        return self.shopping_cart.user_id
