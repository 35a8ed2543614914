"""
Person request/response schemas
"""

from pydantic import BaseModel, Field, field_serializer
from typing import Optional, List
from datetime import datetime

from drama_tracker.core.utils import format_timestamp_with_timezone

class PersonCreate(BaseModel):
    """Request body for adding a friend"""
    name: Optional[str] = Field(default=None, description="Display name, unique ignoring case")
    icon: Optional[str] = Field(default=None, description="Emoji icon")

class PersonUpdate(PersonCreate):
    """Request body for renaming a friend or changing the icon"""

class PasswordUpdate(BaseModel):
    """Request body for setting a password"""
    password: Optional[str] = None

class PersonSummary(BaseModel):
    """Compact person reference embedded in other payloads"""
    id: int
    name: str
    icon: Optional[str] = None

    class Config:
        from_attributes = True

class PersonResponse(PersonSummary):
    """Person as listed on the friends page"""
    is_admin: bool = False
    created_at: Optional[datetime] = None

    @field_serializer('created_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

class PersonDramaSummary(BaseModel):
    """A drama the person took part in"""
    id: int
    title: str
    severity: int
    is_finished: bool
    created_at: Optional[datetime] = None

    @field_serializer('created_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True

class PersonDetailResponse(PersonResponse):
    """Person with their dramas, newest first"""
    dramas: List[PersonDramaSummary] = []
