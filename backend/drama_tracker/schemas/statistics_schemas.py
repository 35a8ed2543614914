"""
Statistics schemas
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date

class WeeklyCount(BaseModel):
    """Dramas created in the week starting on a Monday"""
    week_start: date
    count: int

class PersonInvolvement(BaseModel):
    person_id: int
    name: str
    icon: Optional[str] = None
    count: int

class MonthlyDramaQueen(BaseModel):
    """Most-involved person of a calendar month"""
    month: str          # "YYYY-MM"
    month_label: str    # "January 2025"
    person_id: int
    name: str
    icon: Optional[str] = None
    count: int
    is_current_month: bool

class LeaderboardEntry(BaseModel):
    person_id: int
    name: str
    icon: Optional[str] = None
    count: int
    rank: int

class StatisticsResponse(BaseModel):
    total_dramas: int
    per_person: List[PersonInvolvement]
    per_week: List[WeeklyCount]
    monthly_queens: List[MonthlyDramaQueen]
    leaderboard: List[LeaderboardEntry] = []
