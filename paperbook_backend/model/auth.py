from sqlalchemy import Column, Date, Enum, String
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class User(ResourceMixin, Base):
    __tablename__ = 'user'

    # A user owns itself
    __owner_field__ = 'id'

    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    password = Column(String(255), nullable=False)  # argon2 hash, never plain text
    role = Column(Enum('admin', 'seller', 'user', name='user_role'), nullable=False, default='user', server_default='user')
    phone = Column(String(32))
    birth_date = Column(Date)

    # Relationships
    addresses = relationship("Address", back_populates="user", uselist=True, lazy="select", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user", uselist=True, lazy="select", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="user", uselist=True, lazy="select", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="user", uselist=True, lazy="select", cascade="all, delete-orphan")
    shopping_carts = relationship("ShoppingCart", back_populates="user", uselist=True, lazy="select", cascade="all, delete-orphan")
