"""
Severity vote data model
"""

from sqlalchemy import Column, Integer, ForeignKey, DateTime, Text, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from drama_tracker.core.database import Base

class Vote(Base):
    """One person's severity rating for one drama"""
    __tablename__ = "drama_severity_votes"
    __table_args__ = (
        UniqueConstraint("drama_id", "person_id", name="uq_drama_person_vote"),
    )

    id = Column(Integer, primary_key=True, index=True)
    drama_id = Column(Integer, ForeignKey("dramas.id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    severity = Column(Integer, nullable=False)     # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    drama = relationship("Drama", back_populates="votes")
    person = relationship("Person", back_populates="votes")
