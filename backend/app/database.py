"""
Database session access for the API.

Re-exports core.db. Initialization happens explicitly in the app's startup
hook, never at import time, so tests can point the manager at their own
database first.
"""

from core.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
