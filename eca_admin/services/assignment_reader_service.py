from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import NotFoundError, classify_storage_error
from eca_admin.models import Assignment, AssignmentReader, User
from eca_admin.schemas.assignment import AssignmentReaderCreate
from eca_admin.services.validation import ensure_exists, require_fields

logger = logging.getLogger(__name__)


async def _ensure_assignment(db: AsyncSession, assignment_id: int) -> None:
    exists = await db.scalar(select(Assignment.id).where(Assignment.id == assignment_id))
    if exists is None:
        raise NotFoundError("Assignment not found")


async def list_reader_history(db: AsyncSession, assignment_id: int):
    """
    Reader history of an assignment, most recent assignment first.

    :raises NotFoundError: unknown assignment
    """
    await _ensure_assignment(db, assignment_id)
    result = await db.scalars(
        select(AssignmentReader)
        .options(selectinload(AssignmentReader.reader))
        .where(AssignmentReader.assignment_id == assignment_id)
        .order_by(AssignmentReader.assigned_date.desc(), AssignmentReader.id.desc())
    )
    return result.all()


async def record_reader(
    db: AsyncSession, assignment_id: int, data: AssignmentReaderCreate
):
    """
    Append a reader (re)assignment to the history, stamped with the current time.

    Existing entries are never modified and ``Assignment.reader_id`` is left
    as is: callers that want the current reader to follow must update the
    assignment as well.

    Raises:
        ValidationError: readerId missing
        NotFoundError: unknown assignment or reader
    """
    require_fields(data, ("reader_id", "readerId"))
    await _ensure_assignment(db, assignment_id)
    reader = await ensure_exists(db, User, data.reader_id, "Reader")

    entry = AssignmentReader(
        assignment_id=assignment_id,
        reader_id=reader.id,
        assigned_date=datetime.now(timezone.utc),
        notes=data.notes or None,
    )
    try:
        db.add(entry)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error assigning reader {reader.id} to {assignment_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Reader {reader.id} assigned to assignment {assignment_id}")
    return await db.scalar(
        select(AssignmentReader)
        .options(selectinload(AssignmentReader.reader))
        .where(AssignmentReader.id == entry.id)
        .execution_options(populate_existing=True)
    )
