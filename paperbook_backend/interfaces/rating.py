from typing import Optional
from pydantic import BaseModel, Field

from paperbook_backend.interfaces.base import BaseEntityGet, EntityInterface, ListQuery
from paperbook_backend.model.rating import Rating


class RatingCreate(BaseModel):
    product_id: int
    stars: int = Field(ge=0, le=5)
    text: Optional[str] = Field(None, max_length=4096)


class RatingGet(BaseEntityGet):
    stars: int
    text: Optional[str] = None
    user_id: int
    product_id: int


class RatingList(RatingGet):
    pass


class RatingUpdate(BaseModel):
    stars: Optional[int] = Field(None, ge=0, le=5)
    text: Optional[str] = Field(None, max_length=4096)


class RatingQuery(ListQuery):
    product_id: Optional[int] = None
    user_id: Optional[int] = None
    stars: Optional[int] = Field(None, ge=0, le=5)


class RatingInterface(EntityInterface):
    model = Rating
    endpoint = "ratings"
    create = RatingCreate
    get = RatingGet
    list = RatingList
    update = RatingUpdate
    query = RatingQuery
