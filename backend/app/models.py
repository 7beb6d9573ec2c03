"""
ORM models used by the API.

Re-exports the models from core.models.
"""

from core.models import (
    Base,
    Education,
    Experience,
    Profile,
    Project,
    ProjectImage,
    Skill,
    User,
)

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
