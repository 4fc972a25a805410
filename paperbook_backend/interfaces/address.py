from typing import Optional
from pydantic import BaseModel, Field

from paperbook_backend.interfaces.base import BaseEntityGet, EntityInterface, ListQuery
from paperbook_backend.model.address import Address


class AddressCreate(BaseModel):
    postal_code: str = Field(min_length=1, max_length=16, description="Postal/ZIP code")
    street: str = Field(min_length=1, max_length=255)
    house_number: str = Field(min_length=1, max_length=32)
    complement: Optional[str] = Field(None, max_length=255)
    neighborhood: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=255)
    state: str = Field(min_length=1, max_length=64)


class AddressGet(BaseEntityGet):
    postal_code: str
    street: str
    house_number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    user_id: int


class AddressList(AddressGet):
    pass


class AddressUpdate(BaseModel):
    postal_code: Optional[str] = Field(None, min_length=1, max_length=16)
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    house_number: Optional[str] = Field(None, min_length=1, max_length=32)
    complement: Optional[str] = Field(None, max_length=255)
    neighborhood: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=255)
    state: Optional[str] = Field(None, min_length=1, max_length=64)


class AddressQuery(ListQuery):
    postal_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    user_id: Optional[int] = None


class AddressInterface(EntityInterface):
    model = Address
    endpoint = "addresses"
    create = AddressCreate
    get = AddressGet
    list = AddressList
    update = AddressUpdate
    query = AddressQuery
