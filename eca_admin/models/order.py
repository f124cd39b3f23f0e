from datetime import datetime, timezone

from eca_admin.database.db import Base
from sqlalchemy import Column, Integer, ForeignKey, DateTime, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from eca_admin.models.enum import DeliveryMethod


# ---------- Order ---------- #
class Order(Base):
    """A member's request for a catalogue book"""

    __tablename__ = "orders"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    aveugle_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    catalogue_id = Column(Integer, ForeignKey("book.id"), nullable=False, index=True)
    status_id = Column(Integer, ForeignKey("status.id"), nullable=False)
    request_received_date = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    delivery_method = Column(SQLEnum(DeliveryMethod), nullable=True)
    notes = Column(Text, nullable=True)

    aveugle = relationship("User")
    catalogue = relationship("Book")
    status = relationship("Status")
