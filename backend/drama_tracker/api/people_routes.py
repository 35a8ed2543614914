"""
People (friends) API routes
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlalchemy.orm import Session

from drama_tracker.core.database import get_db
from drama_tracker.core.errors import DramaTrackerError
from drama_tracker.core.security import get_current_person
from drama_tracker.models.person import Person
from drama_tracker.schemas.person_schemas import (
    PasswordUpdate,
    PersonCreate,
    PersonDetailResponse,
    PersonResponse,
    PersonUpdate,
)
from drama_tracker.services.person_service import PersonService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[PersonResponse])
async def list_people(db: Session = Depends(get_db)):
    """List all friends"""
    return await PersonService(db).list_people()

@router.post("", response_model=PersonResponse, status_code=201)
async def create_person(
    person_data: PersonCreate,
    db: Session = Depends(get_db)
):
    """Add a friend"""
    try:
        return await PersonService(db).create_person(person_data)
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error creating person")
        raise HTTPException(status_code=500, detail="Failed to create person")

@router.get("/{person_id}", response_model=PersonDetailResponse)
async def get_person(
    person_id: int,
    db: Session = Depends(get_db)
):
    """Get a friend and their dramas"""
    return await PersonService(db).get_person(person_id)

@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int,
    person_data: PersonUpdate,
    db: Session = Depends(get_db)
):
    """Update a friend"""
    try:
        return await PersonService(db).update_person(person_id, person_data)
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error updating person %s", person_id)
        raise HTTPException(status_code=500, detail="Failed to update person")

@router.delete("/{person_id}")
async def delete_person(
    person_id: int,
    db: Session = Depends(get_db)
):
    """Delete a friend who has no dramas"""
    try:
        await PersonService(db).delete_person(person_id)
        return {"success": True}
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error deleting person %s", person_id)
        raise HTTPException(status_code=500, detail="Failed to delete person")

@router.patch("/{person_id}/password")
async def change_password(
    person_id: int,
    password_data: PasswordUpdate,
    caller: Person = Depends(get_current_person),
    db: Session = Depends(get_db)
):
    """Change a password (own, or anyone's for admins)"""
    try:
        await PersonService(db).change_password(person_id, password_data, caller)
        return {"success": True}
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error updating password of person %s", person_id)
        raise HTTPException(status_code=500, detail="Failed to update password")
