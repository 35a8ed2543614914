"""
Severity voting service

One vote per (drama, person). Every submission re-derives the drama's
severity from all of its votes instead of keeping running totals.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from drama_tracker.core.config import settings
from drama_tracker.core.errors import InvalidInputError, NotFoundError
from drama_tracker.models.drama import Drama
from drama_tracker.models.person import Person
from drama_tracker.models.vote import Vote
from drama_tracker.schemas.person_schemas import PersonSummary
from drama_tracker.schemas.vote_schemas import (
    SeverityBucket,
    VoteCreate,
    VoteResponse,
    VoterInfo,
    VoteSubmitResponse,
    VotingStateResponse,
)

logger = logging.getLogger(__name__)

SEVERITY_LEVELS = range(settings.MIN_SEVERITY, settings.MAX_SEVERITY + 1)


def round_half_up(value) -> int:
    """Round to the nearest integer, .5 going up (Python's round() goes to even)"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def average_severity(severities: Sequence[int]) -> float:
    """Arithmetic mean, 0 when there are no votes"""
    if not severities:
        return 0
    return sum(severities) / len(severities)


def rounded_average(severities: Sequence[int]) -> int:
    """Mean rounded half up, e.g. [1, 2] -> 2"""
    if not severities:
        raise ValueError("cannot average an empty vote list")
    return round_half_up(Decimal(sum(severities)) / len(severities))


def vote_distribution(votes: Sequence) -> List[SeverityBucket]:
    """Count and voters for every severity level; empty levels are kept"""
    total = len(votes)
    buckets = []
    for level in SEVERITY_LEVELS:
        level_votes = [v for v in votes if v.severity == level]
        count = len(level_votes)
        buckets.append(SeverityBucket(
            severity=level,
            count=count,
            percentage=round_half_up(Decimal(count * 100) / total) if total else 0,
            voters=[VoterInfo(name=v.person.name, icon=v.person.icon) for v in level_votes],
        ))
    return buckets


def pending_voters(votes: Iterable, roster: Iterable) -> list:
    """Roster members who have not voted, in roster order"""
    voted = {v.person_id for v in votes}
    return [p for p in roster if p.id not in voted]


def validate_severity(severity) -> int:
    if isinstance(severity, bool) or not isinstance(severity, int):
        raise InvalidInputError("Severity must be a whole number between 1 and 5")
    if severity < settings.MIN_SEVERITY or severity > settings.MAX_SEVERITY:
        raise InvalidInputError("Severity must be a number between 1 and 5")
    return severity


class VoteService:
    """Severity voting for dramas"""

    def __init__(self, db: Session):
        self.db = db

    def _get_drama(self, drama_id: int) -> Drama:
        drama = self.db.query(Drama).filter(Drama.id == drama_id).first()
        if not drama:
            raise NotFoundError("Drama not found")
        return drama

    def _upsert_statement(self, drama_id: int, person_id: int, severity: int, comment: Optional[str]):
        """INSERT ... ON CONFLICT (drama_id, person_id) DO UPDATE for the bound dialect"""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"vote upsert is not supported on {dialect}")

        stmt = insert(Vote).values(
            drama_id=drama_id,
            person_id=person_id,
            severity=severity,
            comment=comment,
        )
        return stmt.on_conflict_do_update(
            index_elements=[Vote.drama_id, Vote.person_id],
            set_={
                "severity": stmt.excluded.severity,
                "comment": stmt.excluded.comment,
                "updated_at": func.now(),
            },
        )

    def _store_average(self, drama: Drama) -> Optional[tuple]:
        """Recompute and write the rounded average; None when there are no votes"""
        severities = [
            row[0] for row in
            self.db.query(Vote.severity).filter(Vote.drama_id == drama.id).all()
        ]
        if not severities:
            return None

        average = rounded_average(severities)
        drama.severity = average
        return average, len(severities)

    async def submit_vote(self, drama_id: int, person_id: int, vote_data: VoteCreate) -> VoteSubmitResponse:
        """Create or replace a person's vote and resync the drama's severity"""
        severity = validate_severity(vote_data.severity)
        comment = (vote_data.comment or "").strip() or None
        drama = self._get_drama(drama_id)

        try:
            self.db.execute(self._upsert_statement(drama.id, person_id, severity, comment))
            average, total_votes = self._store_average(drama)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Failed to store vote of person %s on drama %s", person_id, drama_id)
            raise

        vote = (
            self.db.query(Vote)
            .options(joinedload(Vote.person))
            .filter(Vote.drama_id == drama_id, Vote.person_id == person_id)
            .one()
        )

        logger.info(
            "🗳️ Person %s voted %s on drama %s; severity now %s over %s votes",
            person_id, severity, drama_id, average, total_votes,
        )
        return VoteSubmitResponse(
            vote=VoteResponse.model_validate(vote),
            average_severity=average,
            total_votes=total_votes,
        )

    async def get_voting_state(self, drama_id: int, caller_id: Optional[int] = None) -> VotingStateResponse:
        """Votes, averages, distribution and who still owes a vote"""
        self._get_drama(drama_id)

        votes = (
            self.db.query(Vote)
            .options(joinedload(Vote.person))
            .filter(Vote.drama_id == drama_id)
            .order_by(Vote.created_at.desc(), Vote.id.desc())
            .all()
        )
        roster = self.db.query(Person).order_by(Person.name).all()

        current_user_vote = None
        if caller_id is not None:
            current_user_vote = next((v for v in votes if v.person_id == caller_id), None)

        return VotingStateResponse(
            votes=[VoteResponse.model_validate(v) for v in votes],
            average_severity=average_severity([v.severity for v in votes]),
            total_votes=len(votes),
            total_people=len(roster),
            pending_voters=[PersonSummary.model_validate(p) for p in pending_voters(votes, roster)],
            distribution=vote_distribution(votes),
            current_user_vote=VoteResponse.model_validate(current_user_vote) if current_user_vote else None,
        )

    async def recompute_severity(self, drama_id: int) -> Optional[int]:
        """Re-derive a drama's severity from its votes; baseline kept when none"""
        drama = self._get_drama(drama_id)
        result = self._store_average(drama)
        self.db.commit()
        if result is None:
            return None
        logger.info("Recomputed severity of drama %s: %s", drama_id, result[0])
        return result[0]
