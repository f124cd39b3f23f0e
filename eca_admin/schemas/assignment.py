from datetime import datetime

from pydantic import Field

from eca_admin.schemas.base import BaseSchema, RecordId
from eca_admin.schemas.common import (
    BookSummary,
    OrderSummary,
    ReaderSummary,
    StatusOut,
)


class AssignmentCreate(BaseSchema):
    """
    Payload for a new assignment.

    Required ids are optional here so that their absence is reported by the
    validation layer with the name of the missing field.
    """

    reader_id: RecordId | None = None
    catalogue_id: RecordId | None = None
    order_id: RecordId | None = None
    reception_date: datetime | None = None
    sent_to_reader_date: datetime | None = None
    returned_to_eca_date: datetime | None = Field(None, alias="returnedToECADate")
    status_id: RecordId | None = None
    notes: str | None = Field(None, max_length=2000)


class AssignmentUpdate(BaseSchema):
    """Partial update: only the fields present in the payload are applied"""

    reader_id: RecordId | None = None
    catalogue_id: RecordId | None = None
    order_id: RecordId | None = None
    reception_date: datetime | None = None
    sent_to_reader_date: datetime | None = None
    returned_to_eca_date: datetime | None = Field(None, alias="returnedToECADate")
    status_id: RecordId | None = None
    notes: str | None = Field(None, max_length=2000)


class AssignmentOut(BaseSchema):
    id: int
    reader_id: int
    catalogue_id: int
    order_id: int | None
    status_id: int
    reception_date: datetime | None
    sent_to_reader_date: datetime | None
    returned_to_eca_date: datetime | None = Field(alias="returnedToECADate")
    notes: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    reader: ReaderSummary
    catalogue: BookSummary
    order: OrderSummary | None = None
    status: StatusOut


class AssignmentReaderCreate(BaseSchema):
    reader_id: RecordId | None = None
    notes: str | None = Field(None, max_length=2000)


class AssignmentReaderOut(BaseSchema):
    id: int
    assignment_id: int
    reader_id: int
    assigned_date: datetime
    notes: str | None
    reader: ReaderSummary
