from eca_admin.database.db import Base
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Index
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from eca_admin.models.enum import NewsType


# ---------- News ---------- #
class News(Base):
    __tablename__ = "news"
    __table_args__ = (
        Index("ix_news_published_at", "published_at"),
        {"extend_existing": True, "sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    type = Column(SQLEnum(NewsType), nullable=False, default=NewsType.GENERAL)
    author_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    published_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    author = relationship("User", back_populates="news")

    @property
    def type_label(self) -> str:
        return self.type.french_name
