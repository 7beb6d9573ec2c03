"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- The request context (session plus resolved caller)
- The media host client
- Form payloads
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.api import MediaStore, get_media_store

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..models import User
from .forms import education_form, experience_form, profile_form, project_form

# =============================================================================
# Client Dependencies
# =============================================================================


def get_media_client() -> MediaStore:
    """Media host client; tests override this to avoid network calls."""
    return get_media_store()


# =============================================================================
# Combined Dependencies
# =============================================================================


class RequestContext:
    """
    Request context with the session and the resolved caller.

    Both come from the same request-scoped session, so everything done
    through ``ctx.db`` commits or rolls back together.

    Usage:
        @router.post("/education")
        def add(ctx: RequestContext = Depends(get_request_context)):
            profile_service.add_education(ctx.db, ctx.user, form)
    """

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user


def get_request_context(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RequestContext:
    """Get the request context; raises 401 before any handler work."""
    return RequestContext(db=db, user=current_user)


__all__ = [
    # Client dependencies
    "get_media_client",
    # Form dependencies
    "profile_form",
    "education_form",
    "experience_form",
    "project_form",
    # Combined dependencies
    "RequestContext",
    "get_request_context",
]
