from eca_admin.database.db import Base
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from eca_admin.models.enum import UserRole


# ---------- User ---------- #
class User(Base):
    __tablename__ = "user"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=True, index=True)
    name = Column(String, nullable=False, default="")
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    # blind members never log in, so they have no password
    password_hash = Column(String, nullable=True)
    password_needs_change = Column(Boolean, nullable=False, default=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, nullable=False, default=True)
    home_phone = Column(String, nullable=True)
    cell_phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relations:
    # 1. Books added to the catalogue by this user
    books_added = relationship("Book", back_populates="added_by")
    # 2. Articles written by this user
    news = relationship("News", back_populates="author")
    # 3. Assignments where this user is the current reader
    assignments_as_reader = relationship("Assignment", back_populates="reader")
