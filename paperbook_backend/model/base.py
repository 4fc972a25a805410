from typing import Any, Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, func, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class ResourceMixin:
    """
    Columns and ownership lookup shared by every resource table.

    `__owner_field__` names the column holding the owning user's id; kinds
    without an owner leave it as None.
    """

    __owner_field__: Optional[str] = None

    id = Column(Integer, primary_key=True, autoincrement=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def owner_id(self) -> Optional[Any]:
        if self.__owner_field__ is None:
            return None
        return getattr(self, self.__owner_field__)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} active={self.is_active}>"
