"""
Statistics API routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from drama_tracker.core.database import get_db
from drama_tracker.schemas.statistics_schemas import StatisticsResponse
from drama_tracker.services.analytics_service import AnalyticsService

router = APIRouter()

@router.get("", response_model=StatisticsResponse)
async def get_statistics(db: Session = Depends(get_db)):
    """Weekly trend, involvement, monthly drama queens and this month's leaderboard"""
    return await AnalyticsService(db).get_statistics()
