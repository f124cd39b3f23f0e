from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import NotFoundError, classify_storage_error
from eca_admin.models import Book, Order, Status, User
from eca_admin.schemas.order import OrderCreate
from eca_admin.services.validation import ensure_exists, require_fields

logger = logging.getLogger(__name__)

_RELATIONS = (
    selectinload(Order.aveugle),
    selectinload(Order.catalogue),
    selectinload(Order.status),
)


async def get_statuses(db: AsyncSession):
    """Workflow statuses by sort order, then name"""
    result = await db.scalars(
        select(Status).order_by(Status.sort_order.asc(), Status.name.asc())
    )
    return result.all()


async def get_orders(db: AsyncSession, status_id: int | None = None):
    query = select(Order).options(*_RELATIONS).order_by(Order.id.desc())
    if status_id is not None:
        query = query.where(Order.status_id == status_id)
    result = await db.scalars(query)
    return result.all()


async def get_order(db: AsyncSession, order_id: int):
    order = await db.scalar(
        select(Order)
        .options(*_RELATIONS)
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    if order is None:
        raise NotFoundError("Order not found")
    return order


async def create_order(db: AsyncSession, data: OrderCreate):
    """
    Record a member's request for a book.

    Raises:
        ValidationError: aveugleId, catalogueId or statusId missing
        RelatedRecordMissing: unknown member, book or status
    """
    require_fields(
        data,
        ("aveugle_id", "aveugleId"),
        ("catalogue_id", "catalogueId"),
        ("status_id", "statusId"),
    )
    await ensure_exists(db, User, data.aveugle_id, "User")
    await ensure_exists(db, Book, data.catalogue_id, "Catalogue book")
    await ensure_exists(db, Status, data.status_id, "Status")

    fields = data.model_dump(exclude_none=True)
    order = Order(**fields)
    try:
        db.add(order)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error creating order: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Order created: {order.id} (book={order.catalogue_id})")
    return await get_order(db, order.id)
