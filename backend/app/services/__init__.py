"""
Backend services for Student Profiles.
"""

from . import profile_service

__all__ = ["profile_service"]
