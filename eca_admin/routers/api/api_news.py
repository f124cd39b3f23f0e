from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import PageNumber, PathId
from eca_admin.models import User
from eca_admin.schemas.news import NewsIn, NewsOut, NewsPage, NewsSearchResult
from eca_admin.services.news_service import (
    create_article,
    delete_article,
    get_article,
    get_news,
    search_news,
    update_article,
)

router = APIRouter(prefix="/news", tags=["News (API)"])
DBType = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_staff)]


@router.get("", response_model=NewsPage)
async def read_news(
    db: DBType,
    current_user: CurrentUser,
    page: PageNumber = 1,
    limit: int = Query(5, ge=1, le=100),
    type: str | None = None,
    search: str | None = None,
):
    """
    Articles, most recently published first.

    - **type**: GENERAL, EVENEMENT, ANNONCE, ACTUALITE, PROGRAMMATION or all
    - **search**: title or content, or a type name
    """
    return await get_news(db, page, limit, type, search)


@router.get("/search", response_model=list[NewsSearchResult])
async def read_news_search(db: DBType, current_user: CurrentUser, term: str = ""):
    return await search_news(db, term)


@router.get("/{news_id}", response_model=NewsOut)
async def read_article(db: DBType, current_user: CurrentUser, news_id: PathId):
    return await get_article(db, news_id)


@router.post("", response_model=NewsOut, status_code=status.HTTP_201_CREATED)
async def add_article(db: DBType, current_user: CurrentUser, data: NewsIn):
    return await create_article(db, data, current_user.id)


@router.put("/{news_id}", response_model=NewsOut)
async def edit_article(
    db: DBType, current_user: CurrentUser, news_id: PathId, data: NewsIn
):
    return await update_article(db, news_id, data)


@router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_article(db: DBType, current_user: CurrentUser, news_id: PathId):
    await delete_article(db, news_id)
    return None
