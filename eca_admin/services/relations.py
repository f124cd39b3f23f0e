from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

logger = logging.getLogger(__name__)

# Join-table helpers. Nothing is committed here: callers run them inside
# their own transaction so that a partial membership is never visible.


async def clear_links(db: AsyncSession, link_model, owner_column: str, owner_id: int):
    """Delete every link row of ``owner_id``"""
    await db.execute(
        delete(link_model).where(getattr(link_model, owner_column) == owner_id)
    )


async def add_links(
    db: AsyncSession,
    link_model,
    owner_column: str,
    owner_id: int,
    target_column: str,
    target_ids: list[int],
):
    """Insert one link row per target id"""
    db.add_all(
        [
            link_model(**{owner_column: owner_id, target_column: target_id})
            for target_id in target_ids
        ]
    )
    await db.flush()


async def replace_links(
    db: AsyncSession,
    link_model,
    owner_column: str,
    owner_id: int,
    target_column: str,
    target_ids: list[int],
):
    """Full-replace semantics: the owner ends up linked to exactly ``target_ids``"""
    await clear_links(db, link_model, owner_column, owner_id)
    await add_links(db, link_model, owner_column, owner_id, target_column, target_ids)
    logger.debug(
        f"🔗 {link_model.__tablename__}: {owner_column}={owner_id} -> {target_ids}"
    )


async def get_link(
    db: AsyncSession,
    link_model,
    owner_column: str,
    owner_id: int,
    target_column: str,
    target_id: int,
):
    return await db.scalar(
        select(link_model).where(
            (getattr(link_model, owner_column) == owner_id)
            & (getattr(link_model, target_column) == target_id)
        )
    )
