import math

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import (
    AppError,
    ConflictError,
    NotFoundError,
    classify_storage_error,
)
from eca_admin.models import Book, BookGenre, Genre
from eca_admin.schemas.book import BookCreate, BookUpdate
from eca_admin.services.relations import add_links, replace_links
from eca_admin.services.validation import ensure_all_exist

logger = logging.getLogger(__name__)


async def get_books(db: AsyncSession, search: str = "", page: int = 1, limit: int = 10):
    """
    Paginated catalogue, most recently added first.

    :param search: case-insensitive match on title, author or isbn
    :return: {"items", "total", "page", "total_pages"}
    """
    conditions = []
    search = search.strip()
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                Book.title.ilike(pattern),
                Book.author.ilike(pattern),
                Book.isbn.ilike(pattern),
            )
        )

    total = await db.scalar(select(func.count()).select_from(Book).where(*conditions))
    result = await db.scalars(
        select(Book)
        .where(*conditions)
        .order_by(Book.created_at.desc(), Book.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "items": result.all(),
        "total": total,
        "page": page,
        "total_pages": math.ceil(total / limit),
    }


async def get_book_by_id(db: AsyncSession, book_id: int):
    """
    Book with its genres and the user who added it.

    :raises NotFoundError: unknown book
    """
    book = await db.scalar(
        select(Book)
        .options(selectinload(Book.genres), selectinload(Book.added_by))
        .where(Book.id == book_id)
        .execution_options(populate_existing=True)
    )
    if book is None:
        raise NotFoundError("Book not found")
    return book


async def create_book(db: AsyncSession, data: BookCreate, user_id: int | None):
    genre_ids = list(dict.fromkeys(data.genres))
    try:
        await ensure_all_exist(db, Genre, genre_ids, "Genres")
        fields = data.model_dump(exclude={"genres"})
        if fields.get("available") is None:
            fields["available"] = True
        book = Book(**fields, added_by_id=user_id)
        db.add(book)
        await db.flush()
        await add_links(db, BookGenre, "book_id", book.id, "genre_id", genre_ids)
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error creating book: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Book created: {book.id} - {book.title}")
    return await get_book_by_id(db, book.id)


async def update_book(db: AsyncSession, book_id: int, data: BookUpdate):
    """
    Partial update of a book. When ``genres`` is present the genre
    membership is replaced in the same transaction.
    """
    fields = data.model_dump(exclude_unset=True)
    genre_ids = fields.pop("genres", None)
    for required in ("title", "author", "available"):
        if required in fields and fields[required] is None:
            fields.pop(required)

    try:
        book = await db.get(Book, book_id)
        if book is None:
            raise NotFoundError("Book not found")
        for key, value in fields.items():
            setattr(book, key, value)
        if genre_ids is not None:
            genre_ids = list(dict.fromkeys(genre_ids))
            await ensure_all_exist(db, Genre, genre_ids, "Genres")
            await replace_links(db, BookGenre, "book_id", book_id, "genre_id", genre_ids)
        await db.commit()
    except AppError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"❌ Error updating book {book_id}: {e}")
        raise classify_storage_error(e)

    logger.info(f"✅ Book {book_id} updated")
    return await get_book_by_id(db, book_id)


async def delete_book(db: AsyncSession, book_id: int):
    book = await db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    try:
        await db.delete(book)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"⚠️ Book {book_id} is still referenced: {e.orig}")
        raise ConflictError("Book is still referenced by orders or assignments")
    logger.info(f"🗑️ Book {book_id} deleted")
    return True
