# Business logic services
from .analytics_service import AnalyticsService
from .auth_service import AuthService
from .drama_service import DramaService
from .person_service import PersonService
from .vote_service import VoteService

__all__ = ["AnalyticsService", "AuthService", "DramaService", "PersonService", "VoteService"]
