from datetime import datetime, timezone

from eca_admin.database.db import Base
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship


# ---------- Book ---------- #
class Book(Base):
    __tablename__ = "book"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    publisher = Column(String, nullable=True)
    isbn = Column(String, nullable=True, index=True)
    description = Column(Text, nullable=True)
    published_date = Column(DateTime(timezone=True), nullable=True)
    reading_duration_minutes = Column(Integer, nullable=True)
    available = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    added_by_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)

    # 🔗 relations
    added_by = relationship("User", back_populates="books_added")
    genres = relationship(
        "Genre", secondary="book_genre", back_populates="books", viewonly=True
    )


# ---------- Book ↔ Genre ---------- #
class BookGenre(Base):
    __tablename__ = "book_genre"
    __table_args__ = {"extend_existing": True}

    book_id = Column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id = Column(
        Integer, ForeignKey("genre.id", ondelete="CASCADE"), primary_key=True
    )
