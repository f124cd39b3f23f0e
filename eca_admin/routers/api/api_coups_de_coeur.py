from typing import Annotated
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import PageNumber, PathId, QueryId
from eca_admin.models import User
from eca_admin.schemas.common import Page
from eca_admin.schemas.coups_de_coeur import (
    CoupsDeCoeurCreate,
    CoupsDeCoeurOut,
    CoupsDeCoeurPreview,
    CoupsDeCoeurUpdate,
    MembershipCreate,
    MembershipOut,
    PositionOut,
)
from eca_admin.services.coups_de_coeur_service import (
    add_book,
    create_coup_de_coeur,
    delete_coup_de_coeur,
    get_coup_de_coeur,
    get_membership,
    get_position,
    list_coups_de_coeur,
    preview_coups_de_coeur,
    remove_book,
    replace_coup_de_coeur,
)
from eca_admin.services.validation import require_fields

router = APIRouter(prefix="/coups-de-coeur", tags=["Coups de coeur (API)"])
DBType = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_staff)]


@router.get("", response_model=Page[CoupsDeCoeurOut])
async def read_coups_de_coeur(
    request: Request,
    db: DBType,
    current_user: CurrentUser,
    search: str = "",
    page: PageNumber = 1,
    limit: int | None = Query(None, ge=1, le=100),
    recent: bool = False,
):
    """
    Paginated collections, newest first.

    - **search**: title, description, or title/author of a member book
    - **recent**: only the latest collection(s)
    """
    limit = limit or request.app.state.settings.DEFAULT_PAGE_SIZE
    return await list_coups_de_coeur(db, search, page, limit, recent)


@router.get("/position", response_model=PositionOut)
async def read_position(db: DBType, current_user: CurrentUser, id: QueryId):
    """Page (one collection per page) on which a collection is displayed"""
    return {"page": await get_position(db, id)}


@router.get("/preview", response_model=list[CoupsDeCoeurPreview])
async def read_preview(db: DBType, current_user: CurrentUser, search: str = ""):
    return await preview_coups_de_coeur(db, search)


@router.get("/{coup_id}", response_model=CoupsDeCoeurOut)
async def read_coup_de_coeur(db: DBType, current_user: CurrentUser, coup_id: PathId):
    return await get_coup_de_coeur(db, coup_id)


@router.post("", response_model=CoupsDeCoeurOut, status_code=status.HTTP_201_CREATED)
async def add_coup_de_coeur(
    db: DBType, current_user: CurrentUser, data: CoupsDeCoeurCreate
):
    """
    Create a collection.

    - **title**, **description**, **audioPath**: required
    - **bookIds**: array of catalogue book ids (may be empty)
    """
    return await create_coup_de_coeur(db, data, current_user.id)


@router.put("/{coup_id}", response_model=CoupsDeCoeurOut)
async def edit_coup_de_coeur(
    db: DBType, current_user: CurrentUser, coup_id: PathId, data: CoupsDeCoeurUpdate
):
    """Update a collection and replace its whole book list"""
    return await replace_coup_de_coeur(db, coup_id, data)


@router.delete("/{coup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_coup_de_coeur(db: DBType, current_user: CurrentUser, coup_id: PathId):
    await delete_coup_de_coeur(db, coup_id)
    return None


# ---------- Membership ---------- #


@router.get("/{coup_id}/books/{book_id}", response_model=MembershipOut)
async def read_membership(
    db: DBType, current_user: CurrentUser, coup_id: PathId, book_id: PathId
):
    return await get_membership(db, coup_id, book_id)


@router.post(
    "/{coup_id}/books/{book_id}",
    response_model=MembershipOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_membership(
    db: DBType, current_user: CurrentUser, coup_id: PathId, book_id: PathId
):
    return await add_book(db, coup_id, book_id)


@router.post(
    "/{coup_id}/books",
    response_model=MembershipOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_membership_from_body(
    db: DBType, current_user: CurrentUser, coup_id: PathId, data: MembershipCreate
):
    require_fields(data, ("book_id", "bookId"))
    return await add_book(db, coup_id, data.book_id)


@router.delete("/{coup_id}/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_membership(
    db: DBType, current_user: CurrentUser, coup_id: PathId, book_id: PathId
):
    await remove_book(db, coup_id, book_id)
    return None


@router.delete("/{coup_id}/books", status_code=status.HTTP_204_NO_CONTENT)
async def remove_membership_from_body(
    db: DBType, current_user: CurrentUser, coup_id: PathId, data: MembershipCreate
):
    require_fields(data, ("book_id", "bookId"))
    await remove_book(db, coup_id, data.book_id)
    return None
