from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field

from paperbook_backend.interfaces.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from paperbook_backend.model.shopping_cart import ProductGroup, ShoppingCart


class ProductGroupCreate(BaseModel):
    shopping_cart_id: int
    product_id: int
    amount: int = Field(1, ge=1)


class ProductGroupGet(BaseEntityGet):
    amount: int
    product_id: int
    shopping_cart_id: int


class ProductGroupList(ProductGroupGet):
    pass


class ProductGroupUpdate(BaseModel):
    amount: Optional[int] = Field(None, ge=1)


class ProductGroupQuery(ListQuery):
    shopping_cart_id: Optional[int] = None
    product_id: Optional[int] = None


class ProductGroupInterface(EntityInterface):
    model = ProductGroup
    endpoint = "product-groups"
    create = ProductGroupCreate
    get = ProductGroupGet
    list = ProductGroupList
    update = ProductGroupUpdate
    query = ProductGroupQuery


class CartItem(BaseModel):
    """Product line given inline when a cart is created."""
    product_id: int
    amount: int = Field(1, ge=1)


class ShoppingCartCreate(BaseModel):
    product_groups: List[CartItem] = Field(default_factory=list)


class ShoppingCartGet(BaseEntityGet):
    price: float
    user_id: int
    product_groups: List[ProductGroupList] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_product_groups", "product_groups"),
        description="Active product groups only",
    )


class ShoppingCartList(BaseEntityList):
    price: float
    user_id: int


class ShoppingCartUpdate(BaseModel):
    price: Optional[float] = Field(None, ge=0, description="Manual price correction")


class ShoppingCartQuery(ListQuery):
    user_id: Optional[int] = None


class ShoppingCartInterface(EntityInterface):
    model = ShoppingCart
    endpoint = "shopping-carts"
    create = ShoppingCartCreate
    get = ShoppingCartGet
    list = ShoppingCartList
    update = ShoppingCartUpdate
    query = ShoppingCartQuery
