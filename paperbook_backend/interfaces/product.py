from typing import Optional
from pydantic import BaseModel, Field, field_validator

from paperbook_backend.interfaces.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from paperbook_backend.model.product import Product


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=4096)
    price: float = Field(ge=0, description="Unit price")
    stock: int = Field(0, ge=0, description="Units available")
    image_url: Optional[str] = Field(None, max_length=2048)

    @field_validator('image_url')
    @classmethod
    def validate_url(cls, v):
        if v and not (v.startswith('http://') or v.startswith('https://')):
            raise ValueError('URL must start with http:// or https://')
        return v


class ProductGet(BaseEntityGet):
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    image_url: Optional[str] = None
    user_id: Optional[int] = Field(None, description="Seller that listed the product")


class ProductList(BaseEntityList):
    name: str
    price: float
    stock: int
    image_url: Optional[str] = None
    user_id: Optional[int] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=4096)
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=2048)

    @field_validator('image_url')
    @classmethod
    def validate_url(cls, v):
        if v and not (v.startswith('http://') or v.startswith('https://')):
            raise ValueError('URL must start with http:// or https://')
        return v


class ProductQuery(ListQuery):
    name: Optional[str] = None
    user_id: Optional[int] = None


class ProductInterface(EntityInterface):
    model = Product
    endpoint = "products"
    create = ProductCreate
    get = ProductGet
    list = ProductList
    update = ProductUpdate
    query = ProductQuery
