from eca_admin.database.db import Base
from sqlalchemy import Column, String, Integer, Text
from sqlalchemy.orm import relationship


class Genre(Base):
    __tablename__ = "genre"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    books = relationship(
        "Book", secondary="book_genre", back_populates="genres", viewonly=True
    )
