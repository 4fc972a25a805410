from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class Rating(ResourceMixin, Base):
    __tablename__ = 'rating'
    __table_args__ = (
        CheckConstraint("stars >= 0 AND stars <= 5", name='ck_rating_stars_range'),
    )
    __owner_field__ = 'user_id'

    stars = Column(Integer, nullable=False)
    text = Column(String(4096))
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    product_id = Column(ForeignKey('product.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    user = relationship('User', back_populates='ratings')
    product = relationship('Product', back_populates='ratings')
