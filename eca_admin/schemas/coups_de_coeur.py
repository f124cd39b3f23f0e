from datetime import datetime
from typing import Any

from pydantic import Field

from eca_admin.schemas.base import BaseSchema, RecordId
from eca_admin.schemas.common import BookSummary, UserName


class CoupsDeCoeurBase(BaseSchema):
    title: str | None = Field(None, max_length=300)
    description: str | None = Field(None, max_length=5000)
    audio_path: str | None = Field(None, max_length=500)
    # presence and type are checked by the validation layer
    book_ids: Any = None
    active: bool | None = None


class CoupsDeCoeurCreate(CoupsDeCoeurBase):
    pass


class CoupsDeCoeurUpdate(CoupsDeCoeurBase):
    pass


class MembershipCreate(BaseSchema):
    book_id: RecordId | None = None


class MembershipOut(BaseSchema):
    coups_de_coeur_id: int
    book_id: int


class CoupsDeCoeurOut(BaseSchema):
    id: int
    title: str
    description: str | None
    audio_path: str | None
    active: bool
    added_by_id: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    added_by: UserName | None = None
    books: list[BookSummary] = []


class CoupsDeCoeurPreview(BaseSchema):
    id: int
    title: str
    description: str | None


class PositionOut(BaseSchema):
    page: int
