from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import PathId
from eca_admin.schemas.genre import GenreIn, GenreOut
from eca_admin.services.genre_service import (
    create_genre,
    delete_genre,
    get_genre,
    get_genres,
    update_genre,
)

router = APIRouter(
    prefix="/genres",
    tags=["Genres (API)"],
    dependencies=[Depends(get_current_staff)],
)
DBType = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=list[GenreOut])
async def read_genres(db: DBType):
    return await get_genres(db)


@router.get("/{genre_id}", response_model=GenreOut)
async def read_genre(db: DBType, genre_id: PathId):
    return await get_genre(db, genre_id)


@router.post("", response_model=GenreOut, status_code=status.HTTP_201_CREATED)
async def add_genre(db: DBType, data: GenreIn):
    return await create_genre(db, data)


@router.put("/{genre_id}", response_model=GenreOut)
async def edit_genre(db: DBType, genre_id: PathId, data: GenreIn):
    return await update_genre(db, genre_id, data)


@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_genre(db: DBType, genre_id: PathId):
    await delete_genre(db, genre_id)
    return None
