"""
Drama API routes
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import List
from sqlalchemy.orm import Session

from drama_tracker.core.database import get_db
from drama_tracker.core.errors import DramaTrackerError
from drama_tracker.schemas.drama_schemas import DramaCreate, DramaFinish, DramaResponse, DramaUpdate
from drama_tracker.services.drama_service import DramaService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[DramaResponse])
async def list_dramas(db: Session = Depends(get_db)):
    """List dramas, newest first"""
    return await DramaService(db).list_dramas()

@router.post("", response_model=DramaResponse, status_code=201)
async def create_drama(
    drama_data: DramaCreate,
    db: Session = Depends(get_db)
):
    """Record a new drama"""
    try:
        return await DramaService(db).create_drama(drama_data)
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error creating drama")
        raise HTTPException(status_code=500, detail="Failed to create drama")

@router.get("/{drama_id}", response_model=DramaResponse)
async def get_drama(
    drama_id: int,
    db: Session = Depends(get_db)
):
    """Get one drama"""
    return await DramaService(db).get_drama(drama_id)

@router.put("/{drama_id}", response_model=DramaResponse)
async def update_drama(
    drama_id: int,
    drama_data: DramaUpdate,
    db: Session = Depends(get_db)
):
    """Edit a drama"""
    try:
        return await DramaService(db).update_drama(drama_id, drama_data)
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error updating drama %s", drama_id)
        raise HTTPException(status_code=500, detail="Failed to update drama")

@router.delete("/{drama_id}")
async def delete_drama(
    drama_id: int,
    db: Session = Depends(get_db)
):
    """Delete a drama and its votes"""
    try:
        await DramaService(db).delete_drama(drama_id)
        return {"success": True}
    except DramaTrackerError:
        raise
    except Exception:
        logger.exception("Error deleting drama %s", drama_id)
        raise HTTPException(status_code=500, detail="Failed to delete drama")

@router.patch("/{drama_id}/finish", response_model=DramaResponse)
async def finish_drama(
    drama_id: int,
    finish_data: DramaFinish,
    db: Session = Depends(get_db)
):
    """Mark a drama finished or reopen it"""
    return await DramaService(db).set_finished(drama_id, finish_data)
