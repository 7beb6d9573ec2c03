"""
Student Profiles Core Library.

Database management, models, repositories, form parsing, display
formatting, caching, the media host client and logging.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import User, Profile, Education
    from core.repositories import ProfileRepository, UserRepository

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Submodules are imported directly to avoid circular dependencies:
#   from core.db import db
#   from core.config import get_settings
#   from core.logging import get_logger
