"""
Drama data model
"""

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Boolean, Table
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from drama_tracker.core.database import Base

drama_participants = Table(
    "drama_participants",
    Base.metadata,
    Column("drama_id", Integer, ForeignKey("dramas.id", ondelete="CASCADE"), primary_key=True),
    Column("person_id", Integer, ForeignKey("people.id", ondelete="CASCADE"), primary_key=True),
)

class Drama(Base):
    """Recorded incident"""
    __tablename__ = "dramas"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    details = Column(Text, nullable=False, default="")
    severity = Column(Integer, nullable=False, default=3)   # 1-5; overwritten by the vote average once votes exist
    is_finished = Column(Boolean, nullable=False, default=False)
    finished_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    participants = relationship(
        "Person",
        secondary=drama_participants,
        back_populates="dramas",
        order_by="Person.name",
    )
    votes = relationship(
        "Vote",
        back_populates="drama",
        cascade="all, delete-orphan",
        order_by="[Vote.created_at.desc(), Vote.id.desc()]",
    )
