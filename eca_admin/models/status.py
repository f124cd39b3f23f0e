from eca_admin.database.db import Base
from sqlalchemy import Column, String, Integer, Text


class Status(Base):
    """Workflow status shared by orders and assignments"""

    __tablename__ = "status"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
