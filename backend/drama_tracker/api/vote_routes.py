"""
Severity voting API routes
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from drama_tracker.core.database import get_db
from drama_tracker.core.errors import DramaTrackerError
from drama_tracker.core.security import get_current_person
from drama_tracker.models.person import Person
from drama_tracker.schemas.vote_schemas import VoteCreate, VoteSubmitResponse, VotingStateResponse
from drama_tracker.services.vote_service import VoteService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{drama_id}/vote", response_model=VoteSubmitResponse)
async def submit_vote(
    drama_id: int,
    vote_data: VoteCreate,
    person: Person = Depends(get_current_person),
    db: Session = Depends(get_db)
):
    """Cast or change the caller's severity vote"""
    try:
        return await VoteService(db).submit_vote(drama_id, person.id, vote_data)
    except DramaTrackerError:
        raise
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to create vote")

@router.get("/{drama_id}/vote", response_model=VotingStateResponse)
async def get_voting_state(
    drama_id: int,
    person: Person = Depends(get_current_person),
    db: Session = Depends(get_db)
):
    """Votes, distribution and pending voters for a drama"""
    return await VoteService(db).get_voting_state(drama_id, caller_id=person.id)
