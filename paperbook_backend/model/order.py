from sqlalchemy import CheckConstraint, Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class Order(ResourceMixin, Base):
    __tablename__ = 'order'
    __table_args__ = (
        CheckConstraint("amount > 0", name='ck_order_amount_positive'),
    )
    __owner_field__ = 'user_id'

    amount = Column(Integer, nullable=False, default=1, server_default="1")
    status = Column(
        Enum('pending', 'sent', 'delivered', 'canceled', name='order_status'),
        nullable=False,
        default='pending',
        server_default='pending'
    )
    tracking_code = Column(String(255))
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    product_id = Column(ForeignKey('product.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    user = relationship('User', back_populates='orders')
    product = relationship('Product', back_populates='orders')
