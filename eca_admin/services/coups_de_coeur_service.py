import math

from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import (
    AppError,
    ConflictError,
    NotFoundError,
    classify_storage_error,
)
from eca_admin.models import Book, CoupsDeCoeur, CoupsDeCoeurBooks
from eca_admin.schemas.coups_de_coeur import CoupsDeCoeurCreate, CoupsDeCoeurUpdate
from eca_admin.services.relations import (
    add_links,
    clear_links,
    get_link,
)
from eca_admin.services.validation import (
    ensure_all_exist,
    ensure_exists,
    parse_id_list,
    require_fields,
)

logger = logging.getLogger(__name__)

PREVIEW_SIZE = 5


def _search_clause(search: str):
    pattern = f"%{search}%"
    matching_books = (
        select(CoupsDeCoeurBooks.coups_de_coeur_id)
        .join(Book, Book.id == CoupsDeCoeurBooks.book_id)
        .where(or_(Book.title.ilike(pattern), Book.author.ilike(pattern)))
    )
    return or_(
        CoupsDeCoeur.title.ilike(pattern),
        CoupsDeCoeur.description.ilike(pattern),
        CoupsDeCoeur.id.in_(matching_books),
    )


def _newest_first():
    return (CoupsDeCoeur.created_at.desc(), CoupsDeCoeur.id.desc())


async def list_coups_de_coeur(
    db: AsyncSession,
    search: str = "",
    page: int = 1,
    limit: int = 10,
    recent: bool = False,
) -> dict:
    """
    Paginated collections, newest first.

    :param search: matches title, description, or the title/author of a member book
    :param recent: only collections created at or after the newest one
    :return: {"items", "total", "page", "total_pages"}
    """
    conditions = []
    search = search.strip()
    if search:
        conditions.append(_search_clause(search))
    if recent:
        last_created = await db.scalar(select(func.max(CoupsDeCoeur.created_at)))
        if last_created is not None:
            conditions.append(CoupsDeCoeur.created_at >= last_created)

    total = await db.scalar(
        select(func.count()).select_from(CoupsDeCoeur).where(*conditions)
    )
    result = await db.scalars(
        select(CoupsDeCoeur)
        .options(selectinload(CoupsDeCoeur.books), selectinload(CoupsDeCoeur.added_by))
        .where(*conditions)
        .order_by(*_newest_first())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "items": result.all(),
        "total": total,
        "page": page,
        "total_pages": math.ceil(total / limit),
    }


async def get_coup_de_coeur(db: AsyncSession, coup_id: int):
    coup = await db.scalar(
        select(CoupsDeCoeur)
        .options(selectinload(CoupsDeCoeur.books), selectinload(CoupsDeCoeur.added_by))
        .where(CoupsDeCoeur.id == coup_id)
        .execution_options(populate_existing=True)
    )
    if coup is None:
        raise NotFoundError("Coup de coeur not found")
    return coup


async def _lock_coup_de_coeur(db: AsyncSession, coup_id: int) -> CoupsDeCoeur:
    """
    Load the collection row with FOR UPDATE so that membership writes on the
    same collection are serialised (no-op on SQLite, which locks the database).
    """
    coup = await db.scalar(
        select(CoupsDeCoeur).where(CoupsDeCoeur.id == coup_id).with_for_update()
    )
    if coup is None:
        raise NotFoundError("Coup de coeur not found")
    return coup


async def create_coup_de_coeur(db: AsyncSession, data: CoupsDeCoeurCreate, user_id: int):
    """Create a collection with its books in one transaction"""
    require_fields(
        data,
        ("title", "title"),
        ("description", "description"),
        ("audio_path", "audioPath"),
    )
    book_ids = parse_id_list(data.book_ids, "bookIds")

    try:
        await ensure_all_exist(db, Book, book_ids, "Books")
        coup = CoupsDeCoeur(
            title=data.title,
            description=data.description,
            audio_path=data.audio_path,
            active=True if data.active is None else data.active,
            added_by_id=user_id,
        )
        db.add(coup)
        await db.flush()
        await add_links(
            db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup.id, "book_id", book_ids
        )
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error creating coup de coeur: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Coup de coeur created: {coup.id} - {coup.title} ({len(book_ids)} books)")
    return await get_coup_de_coeur(db, coup.id)


async def replace_coup_de_coeur(
    db: AsyncSession, coup_id: int, data: CoupsDeCoeurUpdate
):
    """
    Update a collection and replace its whole book membership atomically.

    In one transaction: lock the collection, check that every book exists,
    delete all existing links, update the scalar fields (``active`` defaults
    to true), insert one link per supplied book id. Any failure rolls the
    transaction back and the previous membership stays visible.

    Raises:
        ValidationError: title missing or bookIds not an array
        NotFoundError: unknown collection or book
    """
    require_fields(data, ("title", "title"))
    book_ids = parse_id_list(data.book_ids, "bookIds")
    supplied = data.model_fields_set

    try:
        coup = await _lock_coup_de_coeur(db, coup_id)
        await ensure_all_exist(db, Book, book_ids, "Books")

        await clear_links(db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup_id)
        coup.title = data.title
        if "description" in supplied:
            coup.description = data.description
        if "audio_path" in supplied:
            coup.audio_path = data.audio_path
        coup.active = True if data.active is None else data.active
        await add_links(
            db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup_id, "book_id", book_ids
        )
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error updating coup de coeur {coup_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Coup de coeur {coup_id} updated, books={book_ids}")
    return await get_coup_de_coeur(db, coup_id)


async def delete_coup_de_coeur(db: AsyncSession, coup_id: int):
    """Delete a collection; its book links go with it"""
    coup = await db.get(CoupsDeCoeur, coup_id)
    if coup is None:
        raise NotFoundError("Coup de coeur not found")
    await clear_links(db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup_id)
    await db.delete(coup)
    await db.commit()
    logger.info(f"🗑️ Coup de coeur {coup_id} deleted")
    return True


async def get_position(db: AsyncSession, coup_id: int) -> int:
    """1-based page of a collection when listed newest first, one per page"""
    ids = list(await db.scalars(select(CoupsDeCoeur.id).order_by(*_newest_first())))
    if coup_id not in ids:
        raise NotFoundError("Coup de coeur not found")
    return ids.index(coup_id) + 1


async def preview_coups_de_coeur(db: AsyncSession, search: str = ""):
    search = search.strip()
    if not search:
        return []
    result = await db.scalars(
        select(CoupsDeCoeur)
        .where(_search_clause(search))
        .order_by(*_newest_first())
        .limit(PREVIEW_SIZE)
    )
    return result.all()


# ---------- Single membership ---------- #


async def get_membership(db: AsyncSession, coup_id: int, book_id: int):
    link = await get_link(
        db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup_id, "book_id", book_id
    )
    if link is None:
        raise NotFoundError("Relation not found")
    return link


async def add_book(db: AsyncSession, coup_id: int, book_id: int):
    """
    Add one book to a collection.

    Raises:
        NotFoundError: unknown collection or book
        ConflictError: the book is already in the collection
    """
    try:
        await _lock_coup_de_coeur(db, coup_id)
        await ensure_exists(db, Book, book_id, "Book")
        existing = await get_link(
            db, CoupsDeCoeurBooks, "coups_de_coeur_id", coup_id, "book_id", book_id
        )
        if existing is not None:
            raise ConflictError("Book already in this coup de coeur")
        link = CoupsDeCoeurBooks(coups_de_coeur_id=coup_id, book_id=book_id)
        db.add(link)
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error adding book {book_id} to coup de coeur {coup_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"➕ Book {book_id} added to coup de coeur {coup_id}")
    return link


async def remove_book(db: AsyncSession, coup_id: int, book_id: int):
    """Remove one book from a collection; 404 when it is not a member"""
    try:
        await _lock_coup_de_coeur(db, coup_id)
        link = await get_membership(db, coup_id, book_id)
        await db.delete(link)
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error removing book {book_id} from coup de coeur {coup_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"➖ Book {book_id} removed from coup de coeur {coup_id}")
    return True
