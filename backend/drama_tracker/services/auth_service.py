"""
Login service
"""

import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from drama_tracker.core.errors import InvalidInputError, UnauthenticatedError
from drama_tracker.core.security import verify_password
from drama_tracker.models.person import Person
from drama_tracker.schemas.auth_schemas import LoginRequest, SessionUser

logger = logging.getLogger(__name__)

class AuthService:
    """Name + password authentication"""

    def __init__(self, db: Session):
        self.db = db

    async def authenticate(self, credentials: LoginRequest) -> SessionUser:
        """Return the session user for valid credentials; names match ignoring case"""
        if not credentials.name or not credentials.password:
            raise InvalidInputError("Name and password are required")

        person = (
            self.db.query(Person)
            .filter(func.lower(Person.name) == credentials.name.strip().lower())
            .first()
        )
        if not person or not verify_password(credentials.password, person.password_hash):
            logger.info("Failed login for '%s'", credentials.name)
            raise UnauthenticatedError("Invalid name or password")

        logger.info("🔑 %s logged in", person.name)
        return SessionUser.model_validate(person)
