from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from paperbook_backend.interfaces.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from paperbook_backend.model.order import Order


class OrderStatus(str, Enum):
    pending = "pending"
    sent = "sent"
    delivered = "delivered"
    canceled = "canceled"


class OrderCreate(BaseModel):
    product_id: int
    amount: int = Field(1, ge=1)


class OrderGet(BaseEntityGet):
    amount: int
    status: OrderStatus
    tracking_code: Optional[str] = None
    user_id: int
    product_id: int

    model_config = ConfigDict(use_enum_values=True, from_attributes=True)


class OrderList(OrderGet):
    pass


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = Field(None, description="It is required to send a valid order status")
    tracking_code: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(use_enum_values=True)


class OrderQuery(ListQuery):
    status: Optional[OrderStatus] = None
    product_id: Optional[int] = None
    user_id: Optional[int] = None

    model_config = ConfigDict(use_enum_values=True)


class OrderInterface(EntityInterface):
    model = Order
    endpoint = "orders"
    create = OrderCreate
    get = OrderGet
    list = OrderList
    update = OrderUpdate
    query = OrderQuery
