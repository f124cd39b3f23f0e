from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the Database created at application startup"""
    async with request.app.state.db.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
