from datetime import datetime

from pydantic import Field

from eca_admin.models.enum import DeliveryMethod
from eca_admin.schemas.base import BaseSchema, RecordId
from eca_admin.schemas.common import BookSummary, ReaderSummary, StatusOut


class OrderCreate(BaseSchema):
    aveugle_id: RecordId | None = None
    catalogue_id: RecordId | None = None
    status_id: RecordId | None = None
    request_received_date: datetime | None = None
    delivery_method: DeliveryMethod | None = None
    notes: str | None = Field(None, max_length=2000)


class OrderOut(BaseSchema):
    id: int
    aveugle_id: int
    catalogue_id: int
    status_id: int
    request_received_date: datetime | None
    delivery_method: DeliveryMethod | None
    notes: str | None
    aveugle: ReaderSummary
    catalogue: BookSummary
    status: StatusOut
