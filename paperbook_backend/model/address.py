from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from .base import Base, ResourceMixin


class Address(ResourceMixin, Base):
    __tablename__ = 'address'
    __owner_field__ = 'user_id'

    postal_code = Column(String(16), nullable=False)
    street = Column(String(255), nullable=False)
    house_number = Column(String(32), nullable=False)
    complement = Column(String(255))
    neighborhood = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(64), nullable=False)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)

    user = relationship('User', back_populates='addresses')
