"""
Passwords and session cookies
"""

import hashlib
import hmac
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from drama_tracker.core.config import settings
from drama_tracker.core.database import get_db
from drama_tracker.core.errors import UnauthenticatedError
from drama_tracker.models.person import Person


def hash_password(password: str) -> str:
    """Hash a password with bcrypt"""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored bcrypt hash"""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


def _signature(value: str) -> str:
    return hmac.new(
        settings.SECRET_KEY.encode('utf-8'),
        value.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


def sign_session(person_id: int) -> str:
    """Build the cookie value for a person: '<id>.<hmac>'"""
    value = str(person_id)
    return f"{value}.{_signature(value)}"


def unsign_session(cookie_value: Optional[str]) -> Optional[int]:
    """Return the person id from a cookie value, or None if missing or tampered"""
    if not cookie_value or "." not in cookie_value:
        return None
    value, signature = cookie_value.rsplit(".", 1)
    if not hmac.compare_digest(signature, _signature(value)):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def get_optional_person(request: Request, db: Session = Depends(get_db)) -> Optional[Person]:
    """Resolve the session cookie to a Person, or None"""
    person_id = unsign_session(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if person_id is None:
        return None
    return db.query(Person).filter(Person.id == person_id).first()


def get_current_person(person: Optional[Person] = Depends(get_optional_person)) -> Person:
    """Require a valid session"""
    if person is None:
        raise UnauthenticatedError("Not authenticated")
    return person
