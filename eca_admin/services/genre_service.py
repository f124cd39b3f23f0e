from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from eca_admin.core.exceptions import ConflictError, NotFoundError, classify_storage_error
from eca_admin.models import Genre
from eca_admin.schemas.genre import GenreIn
from eca_admin.services.validation import require_fields

logger = logging.getLogger(__name__)

DUPLICATE_GENRE = "A genre with this name already exists"


async def get_genres(db: AsyncSession):
    """All genres, alphabetical"""
    genres = await db.scalars(select(Genre).order_by(Genre.name.asc()))
    return genres.all()


async def get_genre(db: AsyncSession, genre_id: int):
    genre = await db.get(Genre, genre_id)
    if genre is None:
        raise NotFoundError("Genre not found")
    return genre


async def _ensure_name_free(db: AsyncSession, name: str, genre_id: int | None = None):
    query = select(Genre.id).where(Genre.name == name)
    if genre_id is not None:
        query = query.where(Genre.id != genre_id)
    if await db.scalar(query) is not None:
        logger.warning(f"⚠️ Duplicate genre name: {name}")
        raise ConflictError(DUPLICATE_GENRE)


async def create_genre(db: AsyncSession, data: GenreIn):
    """
    Create a genre.

    Raises:
        ValidationError: name missing
        ConflictError: a genre with this name already exists
    """
    require_fields(data, ("name", "name"))
    await _ensure_name_free(db, data.name)
    genre = Genre(name=data.name, description=data.description or None)
    try:
        db.add(genre)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError creating genre {data.name}: {e}")
        raise ConflictError(DUPLICATE_GENRE)
    except SQLAlchemyError as e:
        await db.rollback()
        raise classify_storage_error(e)
    logger.info(f"✅ Genre created: {genre.id} - {genre.name}")
    return genre


async def update_genre(db: AsyncSession, genre_id: int, data: GenreIn):
    require_fields(data, ("name", "name"))
    genre = await get_genre(db, genre_id)
    await _ensure_name_free(db, data.name, genre_id)
    try:
        genre.name = data.name
        genre.description = data.description or None
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"❌ IntegrityError updating genre {genre_id}: {e}")
        raise ConflictError(DUPLICATE_GENRE)
    logger.info(f"✅ Genre {genre_id} updated")
    return genre


async def delete_genre(db: AsyncSession, genre_id: int):
    """Delete a genre; books simply lose it"""
    genre = await get_genre(db, genre_id)
    await db.delete(genre)
    await db.commit()
    logger.info(f"🗑️ Genre {genre_id} deleted")
    return True
