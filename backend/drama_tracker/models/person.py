"""
Person data model
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from drama_tracker.core.database import Base

class Person(Base):
    """Roster member (a friend)"""
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)   # display name, unique ignoring case
    icon = Column(String(16), nullable=False, default="👤")   # emoji shown next to the name
    password_hash = Column(String(100), nullable=True)        # bcrypt; no password means no login
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    dramas = relationship(
        "Drama",
        secondary="drama_participants",
        back_populates="participants",
        order_by="Drama.created_at.desc()",
    )
    votes = relationship("Vote", back_populates="person", cascade="all, delete-orphan")

# Case-insensitive uniqueness of names
Index("ix_people_name_lower", func.lower(Person.name), unique=True)
