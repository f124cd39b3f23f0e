from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from eca_admin.schemas.base import BaseSchema

T = TypeVar("T")


class ReaderSummary(BaseSchema):
    """Identity fields exposed when a user is embedded in another resource"""

    id: int
    name: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class UserName(BaseSchema):
    id: int
    name: str | None = None


class BookSummary(BaseSchema):
    id: int
    title: str
    author: str
    isbn: str | None = None


class StatusOut(BaseSchema):
    id: int
    name: str
    description: str | None = None
    sort_order: int = 0


class OrderSummary(BaseSchema):
    id: int
    request_received_date: datetime | None = None


class Page(BaseModel, Generic[T]):
    """Paginated listing"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    items: list[T]
    total: int
    page: int
    total_pages: int
