from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class Product(ResourceMixin, Base):
    """
    Catalog product.

    Products have no owner for the purposes of access control: any admin or
    seller may manage them. `user_id` records the seller that listed the
    product and backs the "products of a user" listing.
    """
    __tablename__ = 'product'
    __table_args__ = (
        CheckConstraint("price >= 0", name='ck_product_price_positive'),
        CheckConstraint("stock >= 0", name='ck_product_stock_positive'),
    )

    name = Column(String(255), nullable=False)
    description = Column(String(4096))
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    stock = Column(Integer, nullable=False, default=0, server_default="0")
    image_url = Column(String(2048))
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), index=True)

    user = relationship('User', back_populates='products')
    ratings = relationship("Rating", back_populates="product", uselist=True, lazy="select", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="product", uselist=True, lazy="select", cascade="all, delete-orphan")
    product_groups = relationship("ProductGroup", back_populates="product", uselist=True, lazy="select", cascade="all, delete-orphan")
