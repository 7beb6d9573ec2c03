"""
SQLAlchemy models for Student Profiles.

Single source of truth for all database models.

Usage:
    from core.models import User, Profile, Education
"""

from .base import Base
from .education import Education
from .experience import Experience
from .profile import Profile, Skill
from .project import Project, ProjectImage
from .user import User

__all__ = [
    "Base",
    "User",
    "Profile",
    "Skill",
    "Education",
    "Experience",
    "Project",
    "ProjectImage",
]
