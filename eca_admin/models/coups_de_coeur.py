from datetime import datetime, timezone

from eca_admin.database.db import Base
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship


# ---------- Coup de coeur ---------- #
class CoupsDeCoeur(Base):
    """A curated set of books presented with an audio narration"""

    __tablename__ = "coups_de_coeur"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    audio_path = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    added_by_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    added_by = relationship("User")
    books = relationship(
        "Book",
        secondary="coups_de_coeur_books",
        order_by="Book.id",
        viewonly=True,
    )


# ---------- Coup de coeur ↔ Book ---------- #
class CoupsDeCoeurBooks(Base):
    __tablename__ = "coups_de_coeur_books"
    __table_args__ = {"extend_existing": True}

    # the composite key keeps each (collection, book) pair unique
    coups_de_coeur_id = Column(
        Integer, ForeignKey("coups_de_coeur.id", ondelete="CASCADE"), primary_key=True
    )
    book_id = Column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), primary_key=True
    )
