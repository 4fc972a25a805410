"""User DTOs and interface."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from paperbook_backend.interfaces.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from paperbook_backend.interfaces.roles import Role
from paperbook_backend.model.auth import User


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255, description="Full name")
    email: EmailStr = Field(description="Login email, unique")
    password: str = Field(min_length=1, max_length=128, description="Plain password, hashed before storage")
    role: Optional[Role] = Field(None, description="Defaults to 'user'; only admins may create admins")
    phone: Optional[str] = Field(None, max_length=32)
    birth_date: Optional[date] = None

    model_config = ConfigDict(use_enum_values=True)


class UserGet(BaseEntityGet):
    name: str
    email: str
    role: Role
    phone: Optional[str] = None
    birth_date: Optional[date] = None

    model_config = ConfigDict(use_enum_values=True, from_attributes=True)


class UserList(BaseEntityList):
    name: str
    email: str
    role: Role

    model_config = ConfigDict(use_enum_values=True, from_attributes=True)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1, max_length=128)
    phone: Optional[str] = Field(None, max_length=32)
    birth_date: Optional[date] = None


class UserQuery(ListQuery):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None

    model_config = ConfigDict(use_enum_values=True)


class UserInterface(EntityInterface):
    model = User
    endpoint = "users"
    create = UserCreate
    get = UserGet
    list = UserList
    update = UserUpdate
    query = UserQuery
