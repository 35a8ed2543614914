"""
API routers
"""

from fastapi import APIRouter, Depends

from drama_tracker.core.security import get_current_person
from .auth_routes import router as auth_router
from .drama_routes import router as drama_router
from .people_routes import router as people_router
from .statistics_routes import router as statistics_router
from .vote_routes import router as vote_router

# Main router
api_router = APIRouter()

# Login is public; everything else needs a session
api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(
    people_router, prefix="/people", tags=["People"],
    dependencies=[Depends(get_current_person)],
)
api_router.include_router(
    drama_router, prefix="/dramas", tags=["Dramas"],
    dependencies=[Depends(get_current_person)],
)
api_router.include_router(
    vote_router, prefix="/dramas", tags=["Votes"],
    dependencies=[Depends(get_current_person)],
)
api_router.include_router(
    statistics_router, prefix="/statistics", tags=["Statistics"],
    dependencies=[Depends(get_current_person)],
)
