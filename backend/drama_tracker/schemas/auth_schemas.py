"""
Authentication schemas
"""

from pydantic import BaseModel
from typing import Optional

class LoginRequest(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None

class SessionUser(BaseModel):
    """The logged-in person"""
    id: int
    name: str
    icon: Optional[str] = None
    is_admin: bool = False

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    success: bool
    user: SessionUser
