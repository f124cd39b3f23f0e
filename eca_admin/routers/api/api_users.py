from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import PathId
from eca_admin.models import User
from eca_admin.schemas.user import UserCreate, UserCreated, UserOut, UserUpdate
from eca_admin.services.user_service import (
    create_user,
    delete_user,
    get_all_users,
    get_user_by_id,
    search_users,
    update_user,
)

router = APIRouter(prefix="/users", tags=["Users (API)"])
DBType = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_staff)]


@router.get("", response_model=list[UserOut], summary="[Admin] List users")
async def read_users(db: DBType, current_user: CurrentUser):
    return await get_all_users(db)


@router.get("/search", response_model=list[UserOut], summary="[Admin] Search users")
async def read_users_search(db: DBType, current_user: CurrentUser, q: str = ""):
    """Match on name, first name, last name or email"""
    return await search_users(db, q)


@router.get("/{user_id}", response_model=UserOut)
async def read_user(db: DBType, current_user: CurrentUser, user_id: PathId):
    return await get_user_by_id(db, user_id)


@router.post(
    "",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    summary="[Admin] Create a user",
)
async def add_user(db: DBType, current_user: CurrentUser, data: UserCreate):
    """
    Create a member or a staff account.

    - **role**: user (default), admin or super_admin; staff roles need a super admin
    - **email**: required for staff accounts

    Staff accounts get a temporary password, returned only in this response.
    """
    user, temporary_password = await create_user(db, data, current_user)
    return UserCreated.model_validate(user).model_copy(
        update={"temporary_password": temporary_password}
    )


@router.put("/{user_id}", response_model=UserOut, summary="[Admin] Update a user")
async def edit_user(
    db: DBType, current_user: CurrentUser, user_id: PathId, data: UserUpdate
):
    return await update_user(db, user_id, data, current_user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="[Admin] Delete a user",
)
async def remove_user(db: DBType, current_user: CurrentUser, user_id: PathId):
    await delete_user(db, user_id, current_user)
    return None
