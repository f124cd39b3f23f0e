from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import MAX_ID, PathId
from eca_admin.schemas.assignment import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentReaderCreate,
    AssignmentReaderOut,
    AssignmentUpdate,
)
from eca_admin.services.assignment_reader_service import (
    list_reader_history,
    record_reader,
)
from eca_admin.services.assignment_service import (
    create_assignment,
    delete_assignment,
    get_all_assignments,
    get_assignment,
    update_assignment,
)

router = APIRouter(
    prefix="/assignments",
    tags=["Assignments (API)"],
    dependencies=[Depends(get_current_staff)],
)
DBType = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=list[AssignmentOut] | AssignmentOut)
async def read_assignments(
    db: DBType, id: Annotated[int | None, Query(gt=0, le=MAX_ID)] = None
):
    """
    List every assignment, newest first.

    - **id**: return only this assignment (404 if unknown)
    """
    if id is not None:
        return await get_assignment(db, id)
    return await get_all_assignments(db)


@router.post("", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def add_assignment(db: DBType, data: AssignmentCreate):
    """
    Assign a catalogue book to a reader.

    - **readerId**, **catalogueId**, **statusId**: required
    - **orderId**, **receptionDate**, **sentToReaderDate**, **returnedToECADate**, **notes**: optional
    """
    return await create_assignment(db, data)


@router.get("/{assignment_id}", response_model=AssignmentOut)
async def read_assignment(db: DBType, assignment_id: PathId):
    return await get_assignment(db, assignment_id)


@router.patch("/{assignment_id}", response_model=AssignmentOut)
@router.put("/{assignment_id}", response_model=AssignmentOut, include_in_schema=False)
async def edit_assignment(db: DBType, assignment_id: PathId, data: AssignmentUpdate):
    """Partial update: only the supplied fields change"""
    return await update_assignment(db, assignment_id, data)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_assignment(db: DBType, assignment_id: PathId):
    await delete_assignment(db, assignment_id)
    return None


# ---------- Reader history ---------- #


@router.get("/{assignment_id}/readers", response_model=list[AssignmentReaderOut])
async def read_reader_history(db: DBType, assignment_id: PathId):
    """Readers this book has been assigned to, most recent first"""
    return await list_reader_history(db, assignment_id)


@router.post(
    "/{assignment_id}/readers",
    response_model=AssignmentReaderOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_reader_history(
    db: DBType, assignment_id: PathId, data: AssignmentReaderCreate
):
    """Record a (re)assignment to a reader"""
    return await record_reader(db, assignment_id, data)
