"""
Repository pattern implementations for data access.

Repositories wrap the ORM queries for each aggregate and never commit;
the request-scoped session decides when the unit of work ends.

Usage:
    from core.repositories import ProfileRepository
    from core.db import db

    with db.session() as session:
        profile = ProfileRepository(session).get_full_by_user_id(user_id)
"""

from .base import BaseRepository
from .history_repository import EducationRepository, ExperienceRepository
from .profile_repository import ProfileRepository
from .project_repository import ProjectRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProfileRepository",
    "EducationRepository",
    "ExperienceRepository",
    "ProjectRepository",
]
