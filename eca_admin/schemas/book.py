from pydantic import Field
from datetime import datetime

from eca_admin.schemas.base import MAX_ID, BaseSchema, RecordId
from eca_admin.schemas.common import ReaderSummary
from eca_admin.schemas.genre import GenreOut


class BookBase(BaseSchema):
    publisher: str | None = Field(None, max_length=200)
    isbn: str | None = Field(None, max_length=20)
    description: str | None = Field(None, max_length=5000)
    published_date: datetime | None = None
    reading_duration_minutes: int | None = Field(None, ge=0, le=MAX_ID)
    available: bool | None = None


class BookCreate(BookBase):
    title: str = Field(..., min_length=1, max_length=300)
    author: str = Field(..., min_length=1, max_length=200)
    genres: list[RecordId] = Field(default_factory=list)


class BookUpdate(BookBase):
    """Partial update; ``genres`` replaces the whole genre list when present"""

    title: str | None = Field(None, min_length=1, max_length=300)
    author: str | None = Field(None, min_length=1, max_length=200)
    genres: list[RecordId] | None = None


class BookOut(BaseSchema):
    """Book returned by the API"""

    id: int
    title: str
    author: str
    publisher: str | None
    isbn: str | None
    description: str | None
    published_date: datetime | None
    reading_duration_minutes: int | None
    available: bool
    added_by_id: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BookDetail(BookOut):
    genres: list[GenreOut] = []
    added_by: ReaderSummary | None = None
