from datetime import datetime, timezone

from eca_admin.database.db import Base
from sqlalchemy import Column, Integer, ForeignKey, DateTime, Text, Index
from sqlalchemy.orm import relationship


# ---------- Assignment ---------- #
class Assignment(Base):
    """A catalogue book lent to a reader for recording"""

    __tablename__ = "assignment"
    __table_args__ = {"extend_existing": True, "sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    reader_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    catalogue_id = Column(Integer, ForeignKey("book.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True, index=True)
    status_id = Column(Integer, ForeignKey("status.id"), nullable=False)
    reception_date = Column(DateTime(timezone=True), nullable=True)
    sent_to_reader_date = Column(DateTime(timezone=True), nullable=True)
    returned_to_eca_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # 🔗 relations
    reader = relationship("User", back_populates="assignments_as_reader")
    catalogue = relationship("Book")
    order = relationship("Order")
    status = relationship("Status")


# ---------- Reader history ---------- #
class AssignmentReader(Base):
    """
    One entry of the reader history of an assignment.

    Rows are only ever inserted. ``assignment_id`` is not a foreign key,
    so the history outlives a deleted assignment.
    """

    __tablename__ = "assignment_reader"
    __table_args__ = (
        Index("ix_assignment_reader_assignment_date", "assignment_id", "assigned_date"),
        {"extend_existing": True, "sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    assignment_id = Column(Integer, nullable=False)
    reader_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    assigned_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    notes = Column(Text, nullable=True)

    reader = relationship("User")
