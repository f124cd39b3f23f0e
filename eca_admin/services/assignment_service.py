from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import (
    NotFoundError,
    ValidationError,
    classify_storage_error,
)
from eca_admin.models import Assignment, AssignmentReader, Book, Order, Status, User
from eca_admin.schemas.assignment import AssignmentCreate, AssignmentUpdate
from eca_admin.services.validation import ensure_exists, require_fields

logger = logging.getLogger(__name__)

INITIAL_ASSIGNMENT_NOTE = "Affectation initiale"

_RELATIONS = (
    selectinload(Assignment.reader),
    selectinload(Assignment.catalogue),
    selectinload(Assignment.order),
    selectinload(Assignment.status),
)


async def get_all_assignments(db: AsyncSession):
    """All assignments with their reader, book, order and status, newest id first"""
    result = await db.scalars(
        select(Assignment).options(*_RELATIONS).order_by(Assignment.id.desc())
    )
    return result.all()


async def get_assignment(db: AsyncSession, assignment_id: int):
    """
    Assignment by id with its relations.

    :raises NotFoundError: when the assignment does not exist
    """
    assignment = await db.scalar(
        select(Assignment)
        .options(*_RELATIONS)
        .where(Assignment.id == assignment_id)
        .execution_options(populate_existing=True)
    )
    if assignment is None:
        raise NotFoundError("Assignment not found")
    return assignment


async def _check_references(db: AsyncSession, fields: dict) -> None:
    """Existence check of every reference present in ``fields``"""
    if fields.get("reader_id") is not None:
        await ensure_exists(db, User, fields["reader_id"], "Reader")
    if fields.get("catalogue_id") is not None:
        await ensure_exists(db, Book, fields["catalogue_id"], "Catalogue book")
    if fields.get("order_id") is not None:
        await ensure_exists(db, Order, fields["order_id"], "Order")
    if fields.get("status_id") is not None:
        await ensure_exists(db, Status, fields["status_id"], "Status")


async def create_assignment(db: AsyncSession, data: AssignmentCreate):
    """
    Create an assignment and its first reader-history entry in one transaction.

    Raises:
        ValidationError: readerId, catalogueId or statusId missing
        RelatedRecordMissing: a referenced reader, book, order or status does not exist
    """
    require_fields(
        data,
        ("reader_id", "readerId"),
        ("catalogue_id", "catalogueId"),
        ("status_id", "statusId"),
    )
    fields = data.model_dump()
    await _check_references(db, fields)

    try:
        assignment = Assignment(**fields)
        db.add(assignment)
        await db.flush()  # assignment.id without commit

        db.add(
            AssignmentReader(
                assignment_id=assignment.id,
                reader_id=assignment.reader_id,
                notes=INITIAL_ASSIGNMENT_NOTE,
            )
        )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error creating assignment: {e}")
        raise classify_storage_error(e)

    logger.info(
        f"✅ Assignment created: {assignment.id} "
        f"(reader={assignment.reader_id}, book={assignment.catalogue_id})"
    )
    return await get_assignment(db, assignment.id)


async def update_assignment(db: AsyncSession, assignment_id: int, data: AssignmentUpdate):
    """
    Apply a partial update. Only the fields present in the payload change;
    a date sent as null is cleared.

    The reader history is not touched: recording a reassignment is done
    through ``record_reader``.
    """
    assignment = await db.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment not found")

    fields = data.model_dump(exclude_unset=True)
    for name, label in (
        ("reader_id", "readerId"),
        ("catalogue_id", "catalogueId"),
        ("status_id", "statusId"),
    ):
        if name in fields and fields[name] is None:
            raise ValidationError(f"{label} cannot be null")
    await _check_references(db, fields)

    try:
        for key, value in fields.items():
            setattr(assignment, key, value)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error updating assignment {assignment_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Assignment {assignment_id} updated: {sorted(fields)}")
    return await get_assignment(db, assignment_id)


async def delete_assignment(db: AsyncSession, assignment_id: int):
    """Delete the assignment. Its reader history is kept."""
    assignment = await db.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment not found")
    await db.delete(assignment)
    await db.commit()
    logger.info(f"🗑️ Assignment {assignment_id} deleted")
    return True
