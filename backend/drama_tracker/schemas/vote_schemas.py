"""
Severity vote schemas
"""

from pydantic import BaseModel, Field, StrictInt, field_serializer
from typing import Optional, List
from datetime import datetime

from drama_tracker.core.utils import format_timestamp_with_timezone
from drama_tracker.schemas.person_schemas import PersonSummary

class VoteCreate(BaseModel):
    """Request body for casting or changing a vote"""
    severity: StrictInt = Field(..., ge=1, le=5, description="Severity from 1 (minor) to 5 (severe)")
    comment: Optional[str] = Field(default=None, description="Optional comment")

class VoteResponse(BaseModel):
    """A stored vote with its voter"""
    id: int
    drama_id: int
    person_id: int
    severity: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    person: PersonSummary

    @field_serializer('created_at', 'updated_at')
    def serialize_dt(self, dt: Optional[datetime]) -> Optional[str]:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True

class VoteSubmitResponse(BaseModel):
    """Result of SubmitVote: the vote plus the drama's new rounded severity"""
    vote: VoteResponse
    average_severity: int
    total_votes: int

class VoterInfo(BaseModel):
    name: str
    icon: Optional[str] = None

class SeverityBucket(BaseModel):
    """Votes cast at one severity level"""
    severity: int
    count: int
    percentage: int
    voters: List[VoterInfo] = []

class VotingStateResponse(BaseModel):
    """Everything the voting panel needs for one drama"""
    votes: List[VoteResponse]
    average_severity: float       # unrounded, 0 when nobody voted
    total_votes: int
    total_people: int
    pending_voters: List[PersonSummary]
    distribution: List[SeverityBucket]
    current_user_vote: Optional[VoteResponse] = None
