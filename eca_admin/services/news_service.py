import math

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from eca_admin.core.exceptions import NotFoundError, ValidationError
from eca_admin.models import News
from eca_admin.models.enum import NewsType
from eca_admin.schemas.news import NewsIn
from eca_admin.services.validation import require_fields

logger = logging.getLogger(__name__)

SEARCH_PREVIEW_SIZE = 5


def _parse_type(value: str) -> NewsType:
    try:
        return NewsType(value.upper())
    except ValueError:
        raise ValidationError("Invalid news type")


async def get_news(
    db: AsyncSession,
    page: int = 1,
    limit: int = 5,
    type: str | None = None,
    search: str | None = None,
) -> dict:
    """
    Paginated articles, most recently published first.

    :param type: restrict to one type; ``all`` or empty disables the filter
    :param search: matches title or content, or an exact type name
    :return: {"items", "total_pages", "current_page", "total_items"}
    """
    conditions = []
    if type and type.lower() != "all":
        conditions.append(News.type == _parse_type(type))
    search = (search or "").strip()
    if search:
        pattern = f"%{search}%"
        matches = [News.title.ilike(pattern), News.content.ilike(pattern)]
        if search.upper() in NewsType.__members__:
            matches.append(News.type == NewsType(search.upper()))
        conditions.append(or_(*matches))

    total = await db.scalar(select(func.count()).select_from(News).where(*conditions))
    result = await db.scalars(
        select(News)
        .options(selectinload(News.author))
        .where(*conditions)
        .order_by(News.published_at.desc(), News.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "items": result.all(),
        "total_pages": math.ceil(total / limit),
        "current_page": page,
        "total_items": total,
    }


async def search_news(db: AsyncSession, term: str | None):
    """Short list of matching articles for the search box"""
    term = (term or "").strip()
    if not term:
        return []
    pattern = f"%{term}%"
    result = await db.scalars(
        select(News)
        .where(or_(News.title.ilike(pattern), News.content.ilike(pattern)))
        .order_by(News.published_at.desc())
        .limit(SEARCH_PREVIEW_SIZE)
    )
    return result.all()


async def get_article(db: AsyncSession, news_id: int):
    article = await db.scalar(
        select(News)
        .options(selectinload(News.author))
        .where(News.id == news_id)
        .execution_options(populate_existing=True)
    )
    if article is None:
        raise NotFoundError("Article not found")
    return article


async def create_article(db: AsyncSession, data: NewsIn, author_id: int):
    require_fields(data, ("title", "title"), ("content", "content"))
    article = News(
        title=data.title,
        content=data.content,
        type=data.type or NewsType.GENERAL,
        author_id=author_id,
    )
    db.add(article)
    await db.commit()
    logger.info(f"✅ Article created: {article.id} - {article.title}")
    return await get_article(db, article.id)


async def update_article(db: AsyncSession, news_id: int, data: NewsIn):
    """Update title and content; the type is kept when not supplied"""
    require_fields(data, ("title", "title"), ("content", "content"))
    article = await get_article(db, news_id)
    article.title = data.title
    article.content = data.content
    if data.type is not None:
        article.type = data.type
    await db.commit()
    logger.info(f"✅ Article {news_id} updated")
    return await get_article(db, news_id)


async def delete_article(db: AsyncSession, news_id: int):
    article = await get_article(db, news_id)
    await db.delete(article)
    await db.commit()
    logger.info(f"🗑️ Article {news_id} deleted")
    return True
