from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.database.auth import get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.routers.api.params import MAX_ID, PathId
from eca_admin.schemas.common import StatusOut
from eca_admin.schemas.order import OrderCreate, OrderOut
from eca_admin.services.order_service import (
    create_order,
    get_order,
    get_orders,
    get_statuses,
)

router = APIRouter(tags=["Orders (API)"], dependencies=[Depends(get_current_staff)])
DBType = Annotated[AsyncSession, Depends(get_db)]


@router.get("/statuses", response_model=list[StatusOut])
async def read_statuses(db: DBType):
    return await get_statuses(db)


@router.get("/orders", response_model=list[OrderOut])
async def read_orders(
    db: DBType,
    status_id: Annotated[int | None, Query(alias="statusId", gt=0, le=MAX_ID)] = None,
):
    """Orders, newest first, optionally restricted to one status"""
    return await get_orders(db, status_id)


@router.get("/orders/{order_id}", response_model=OrderOut)
async def read_order(db: DBType, order_id: PathId):
    return await get_order(db, order_id)


@router.post("/orders", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
async def add_order(db: DBType, data: OrderCreate):
    return await create_order(db, data)
