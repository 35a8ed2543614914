"""
Application configuration
"""

from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Basics
    APP_NAME: str = "Drama Tracker"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Database
    DATABASE_URL: str = "sqlite:///./drama_tracker.db"

    # Sessions
    SECRET_KEY: str = "change-me-in-production"
    SESSION_COOKIE_NAME: str = "drama_tracker_session"
    SESSION_MAX_AGE: int = 30 * 24 * 60 * 60  # 30 days, in seconds

    # Domain rules
    DEFAULT_SEVERITY: int = 3
    MIN_SEVERITY: int = 1
    MAX_SEVERITY: int = 5
    MIN_PARTICIPANTS: int = 2
    MIN_PASSWORD_LENGTH: int = 4
    DEFAULT_ICON: str = "👤"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Global settings instance
settings = Settings()
