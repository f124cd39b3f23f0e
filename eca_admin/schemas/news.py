from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

from eca_admin.models.enum import NewsType
from eca_admin.schemas.base import BaseSchema
from eca_admin.schemas.common import UserName


class NewsIn(BaseSchema):
    """Article payload; title and content are checked by the validation layer"""

    title: str | None = Field(None, max_length=300)
    content: str | None = None
    type: NewsType | None = None


class NewsOut(BaseSchema):
    id: int
    title: str
    content: str
    type: NewsType
    type_label: str
    author_id: int
    published_at: datetime | None
    updated_at: datetime | None = None
    author: UserName | None = None


class NewsSearchResult(BaseSchema):
    id: int
    title: str
    published_at: datetime | None


class NewsPage(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    items: list[NewsOut]
    total_pages: int
    current_page: int
    total_items: int
