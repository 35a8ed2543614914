"""
Authentication API routes
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from drama_tracker.core.config import settings
from drama_tracker.core.database import get_db
from drama_tracker.core.security import get_current_person, sign_session
from drama_tracker.models.person import Person
from drama_tracker.schemas.auth_schemas import LoginRequest, LoginResponse, SessionUser
from drama_tracker.services.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Log in with name and password"""
    user = await AuthService(db).authenticate(credentials)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session(user.id),
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
        path="/",
    )
    return LoginResponse(success=True, user=user)

@router.post("/logout")
async def logout(response: Response):
    """Drop the session cookie"""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True}

@router.get("/me", response_model=SessionUser)
async def me(person: Person = Depends(get_current_person)):
    """The logged-in person"""
    return SessionUser.model_validate(person)
