"""
Roster (friends) management service
"""

import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from drama_tracker.core.config import settings
from drama_tracker.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from drama_tracker.core.security import hash_password
from drama_tracker.models.person import Person
from drama_tracker.models.vote import Vote
from drama_tracker.schemas.person_schemas import (
    PasswordUpdate,
    PersonCreate,
    PersonDetailResponse,
    PersonResponse,
    PersonUpdate,
)
from drama_tracker.services.vote_service import VoteService

logger = logging.getLogger(__name__)

class PersonService:
    """Friends management service"""

    def __init__(self, db: Session):
        self.db = db

    def _get_person(self, person_id: int) -> Person:
        person = self.db.query(Person).filter(Person.id == person_id).first()
        if not person:
            raise NotFoundError("Person not found")
        return person

    def _clean_name(self, name: Optional[str]) -> str:
        if not name or not isinstance(name, str):
            raise InvalidInputError("Name is required and must be a string")
        trimmed = name.strip()
        if not trimmed:
            raise InvalidInputError("Name cannot be empty")
        return trimmed

    def _ensure_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        """Names are unique ignoring case"""
        query = self.db.query(Person).filter(func.lower(Person.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Person.id != exclude_id)
        if query.first():
            raise ConflictError("A person with this name already exists")

    def _commit_name_change(self, person: Person) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            # lost a race with another request using the same name
            self.db.rollback()
            raise ConflictError("A person with this name already exists")
        self.db.refresh(person)

    async def list_people(self) -> List[PersonResponse]:
        """All people, ordered by name"""
        people = self.db.query(Person).order_by(Person.name).all()
        return [PersonResponse.model_validate(p) for p in people]

    async def get_person(self, person_id: int) -> PersonDetailResponse:
        """One person with the dramas they were involved in"""
        person = (
            self.db.query(Person)
            .options(selectinload(Person.dramas))
            .filter(Person.id == person_id)
            .first()
        )
        if not person:
            raise NotFoundError("Person not found")
        return PersonDetailResponse.model_validate(person)

    async def create_person(self, person_data: PersonCreate) -> PersonResponse:
        """Add a friend"""
        name = self._clean_name(person_data.name)
        self._ensure_unique_name(name)

        person = Person(name=name, icon=person_data.icon or settings.DEFAULT_ICON)
        self.db.add(person)
        self._commit_name_change(person)

        logger.info("Added person %s (%s)", person.id, person.name)
        return PersonResponse.model_validate(person)

    async def update_person(self, person_id: int, person_data: PersonUpdate) -> PersonResponse:
        """Rename a friend or change their icon"""
        name = self._clean_name(person_data.name)
        person = self._get_person(person_id)
        self._ensure_unique_name(name, exclude_id=person_id)

        person.name = name
        person.icon = person_data.icon or person.icon
        self._commit_name_change(person)

        logger.info("Updated person %s", person_id)
        return PersonResponse.model_validate(person)

    async def delete_person(self, person_id: int) -> None:
        """Remove a friend who is not part of any drama"""
        person = self._get_person(person_id)
        if person.dramas:
            raise InvalidInputError("Cannot delete person who is involved in dramas")

        # their votes go with them, so the voted dramas need a fresh average
        voted_drama_ids = [
            row[0] for row in
            self.db.query(Vote.drama_id).filter(Vote.person_id == person_id).all()
        ]

        self.db.delete(person)
        self.db.commit()
        logger.info("Deleted person %s", person_id)

        vote_service = VoteService(self.db)
        for drama_id in voted_drama_ids:
            await vote_service.recompute_severity(drama_id)

    async def change_password(self, person_id: int, password_data: PasswordUpdate, caller: Person) -> None:
        """Set a password; allowed for yourself, or for anyone if you are an admin"""
        password = password_data.password
        if not password or not isinstance(password, str):
            raise InvalidInputError("Password is required")
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )

        person = self._get_person(person_id)
        if caller.id != person.id and not caller.is_admin:
            raise ForbiddenError("You can only update your own password")

        person.password_hash = hash_password(password)
        self.db.commit()
        logger.info("Password updated for person %s by person %s", person_id, caller.id)
