from typing import Annotated
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import PageNumber, PathId
from eca_admin.models import User
from eca_admin.schemas.book import BookCreate, BookDetail, BookOut, BookUpdate
from eca_admin.schemas.common import Page
from eca_admin.services.book_service import (
    get_books,
    get_book_by_id,
    create_book,
    delete_book,
    update_book,
)

router = APIRouter(prefix="/books", tags=["Books (API)"])
DBType = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_staff)]


@router.get("", response_model=Page[BookOut])
async def read_books(
    request: Request,
    db: DBType,
    current_user: CurrentUser,
    search: str = "",
    page: PageNumber = 1,
    limit: int | None = Query(None, ge=1, le=100),
):
    """Catalogue, most recently added first; **search** matches title, author or isbn"""
    limit = limit or request.app.state.settings.DEFAULT_PAGE_SIZE
    return await get_books(db, search, page, limit)


@router.get("/{book_id}", response_model=BookDetail)
async def read_book(db: DBType, current_user: CurrentUser, book_id: PathId):
    return await get_book_by_id(db, book_id)


@router.post("", response_model=BookDetail, status_code=status.HTTP_201_CREATED)
async def add_book(db: DBType, current_user: CurrentUser, data: BookCreate):
    return await create_book(db, data, current_user.id)


@router.put("/{book_id}", response_model=BookDetail)
async def edit_book(
    db: DBType, current_user: CurrentUser, book_id: PathId, data: BookUpdate
):
    """Partial update; **genres** replaces the genre list when supplied"""
    return await update_book(db, book_id, data)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_book(db: DBType, current_user: CurrentUser, book_id: PathId):
    await delete_book(db, book_id)
    return None
