from __future__ import annotations

from datetime import datetime
from typing import Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from drama_tracker.core.config import settings
from drama_tracker.core.database import Base, enable_sqlite_foreign_keys, get_db, import_models
from drama_tracker.core.security import hash_password, sign_session
from drama_tracker.models.drama import Drama
from drama_tracker.models.person import Person

import_models()

# ── Database ──────────────────────────────────────────────────────────────────


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared across connections."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ── Data helpers ──────────────────────────────────────────────────────────────


def add_person(
    db: Session,
    name: str,
    icon: str = "👤",
    password: Optional[str] = None,
    is_admin: bool = False,
) -> Person:
    person = Person(
        name=name,
        icon=icon,
        password_hash=hash_password(password) if password else None,
        is_admin=is_admin,
    )
    db.add(person)
    db.commit()
    db.refresh(person)
    return person


def add_drama(
    db: Session,
    title: str,
    participants: List[Person],
    severity: int = 3,
    created_at: Optional[datetime] = None,
) -> Drama:
    drama = Drama(title=title, details="", severity=severity, participants=participants)
    if created_at is not None:
        drama.created_at = created_at
    db.add(drama)
    db.commit()
    db.refresh(drama)
    return drama


@pytest.fixture
def friends(db: Session) -> List[Person]:
    """Alice (admin), Bella, Cara, Dani."""
    return [
        add_person(db, "Alice", icon="👑", is_admin=True),
        add_person(db, "Bella", icon="💅"),
        add_person(db, "Cara", icon="🔥"),
        add_person(db, "Dani", icon="🙃"),
    ]


@pytest.fixture
def drama(db: Session, friends: List[Person]) -> Drama:
    """A drama between Alice, Bella and Cara (Dani is not involved)."""
    return add_drama(db, "Group chat meltdown", friends[:3])


# ── HTTP client ───────────────────────────────────────────────────────────────


@pytest.fixture
def client(session_factory) -> Iterator[TestClient]:
    """TestClient wired to the in-memory database, no lifespan."""
    from main import app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def log_in_as(client: TestClient, person: Person) -> TestClient:
    """Attach a signed session cookie for ``person``."""
    client.cookies.set(settings.SESSION_COOKIE_NAME, sign_session(person.id))
    return client
