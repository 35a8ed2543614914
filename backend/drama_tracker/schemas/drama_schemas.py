"""
Drama request/response schemas
"""

from pydantic import BaseModel, Field, StrictBool, StrictInt, field_serializer
from typing import Optional, List
from datetime import datetime

from drama_tracker.core.utils import format_timestamp_with_timezone
from drama_tracker.schemas.person_schemas import PersonSummary
from drama_tracker.schemas.vote_schemas import VoteResponse

class DramaCreate(BaseModel):
    """Request body for recording a drama"""
    title: Optional[str] = Field(default=None, description="Short title")
    details: Optional[str] = Field(default=None, description="What happened")
    severity: Optional[StrictInt] = Field(default=None, description="Baseline severity 1-5, defaults to 3")
    participant_ids: List[int] = Field(..., description="At least two people")

class DramaUpdate(DramaCreate):
    """Request body for editing a drama"""

class DramaFinish(BaseModel):
    """Request body for marking a drama finished or reopening it"""
    is_finished: StrictBool

class DramaResponse(BaseModel):
    """Drama with participants and votes"""
    id: int
    title: str
    details: str = ""
    severity: int
    is_finished: bool
    finished_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    participants: List[PersonSummary] = []
    votes: List[VoteResponse] = []

    @field_serializer('finished_at', 'created_at', 'updated_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True
