"""
Drama management service
"""

import logging
from typing import List
from sqlalchemy.orm import Session, selectinload

from drama_tracker.core.config import settings
from drama_tracker.core.errors import InvalidInputError, NotFoundError
from drama_tracker.core.utils import utc_now
from drama_tracker.models.drama import Drama
from drama_tracker.models.person import Person
from drama_tracker.models.vote import Vote
from drama_tracker.schemas.drama_schemas import (
    DramaCreate,
    DramaFinish,
    DramaResponse,
    DramaUpdate,
)

logger = logging.getLogger(__name__)

class DramaService:
    """Drama management service"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Drama).options(
            selectinload(Drama.participants),
            selectinload(Drama.votes).selectinload(Vote.person),
        )

    def _get_drama(self, drama_id: int) -> Drama:
        drama = self._query().filter(Drama.id == drama_id).first()
        if not drama:
            raise NotFoundError("Drama not found")
        return drama

    def _validate(self, drama_data: DramaCreate) -> tuple:
        """Check title, severity and participants; returns (title, details, participants)"""
        if not drama_data.title or not isinstance(drama_data.title, str):
            raise InvalidInputError("Title is required and must be a string")

        title = drama_data.title.strip()
        if not title:
            raise InvalidInputError("Title cannot be empty")

        severity = drama_data.severity
        if severity is not None and not settings.MIN_SEVERITY <= severity <= settings.MAX_SEVERITY:
            raise InvalidInputError("Severity must be a number between 1 and 5")

        participant_ids = list(dict.fromkeys(drama_data.participant_ids))
        if len(participant_ids) < settings.MIN_PARTICIPANTS:
            raise InvalidInputError(
                f"Drama must have at least {settings.MIN_PARTICIPANTS} participants"
            )

        participants = self.db.query(Person).filter(Person.id.in_(participant_ids)).all()
        if len(participants) != len(participant_ids):
            raise InvalidInputError("One or more participant IDs are invalid")

        details = (drama_data.details or "").strip()
        return title, details, participants

    async def list_dramas(self) -> List[DramaResponse]:
        """All dramas, newest first"""
        dramas = self._query().order_by(Drama.created_at.desc(), Drama.id.desc()).all()
        return [DramaResponse.model_validate(d) for d in dramas]

    async def get_drama(self, drama_id: int) -> DramaResponse:
        return DramaResponse.model_validate(self._get_drama(drama_id))

    async def create_drama(self, drama_data: DramaCreate) -> DramaResponse:
        """Record a new drama"""
        title, details, participants = self._validate(drama_data)

        drama = Drama(
            title=title,
            details=details,
            severity=drama_data.severity if drama_data.severity is not None else settings.DEFAULT_SEVERITY,
            participants=participants,
        )
        self.db.add(drama)
        self.db.commit()

        logger.info("🎭 Recorded drama %s '%s' with %d participants", drama.id, title, len(participants))
        return await self.get_drama(drama.id)

    async def update_drama(self, drama_id: int, drama_data: DramaUpdate) -> DramaResponse:
        """Edit a drama; the participant set is replaced"""
        drama = self._get_drama(drama_id)
        title, details, participants = self._validate(drama_data)

        drama.title = title
        drama.details = details
        if drama_data.severity is not None:
            drama.severity = drama_data.severity
        drama.participants = participants
        self.db.commit()

        logger.info("Updated drama %s", drama_id)
        return await self.get_drama(drama_id)

    async def delete_drama(self, drama_id: int) -> None:
        """Delete a drama together with its votes"""
        drama = self._get_drama(drama_id)
        self.db.delete(drama)
        self.db.commit()
        logger.info("Deleted drama %s", drama_id)

    async def set_finished(self, drama_id: int, finish_data: DramaFinish) -> DramaResponse:
        """Mark a drama finished, or reopen it"""
        drama = self._get_drama(drama_id)
        drama.is_finished = finish_data.is_finished
        drama.finished_at = utc_now() if finish_data.is_finished else None
        self.db.commit()

        logger.info("Drama %s finished=%s", drama_id, finish_data.is_finished)
        return await self.get_drama(drama_id)

