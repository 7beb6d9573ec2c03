"""
Cache invalidation tied to the session's transaction.

Writes register the key patterns they make stale on the session; the
patterns are deleted only once that session commits, and forgotten if it
rolls back.
"""

from sqlalchemy import event
from sqlalchemy.orm import Session

from core.cache.redis_client import cache
from core.logging import get_logger

logger = get_logger("cache.invalidation")

PENDING_KEY = "pending_cache_invalidations"


def invalidate_after_commit(session: Session, pattern: str) -> None:
    """Delete keys matching ``pattern`` once ``session`` commits."""
    session.info.setdefault(PENDING_KEY, set()).add(pattern)


@event.listens_for(Session, "after_commit")
def _run_pending_invalidations(session: Session) -> None:
    for pattern in session.info.pop(PENDING_KEY, ()):
        deleted = cache.delete_pattern(pattern)
        logger.debug("cache_invalidated", pattern=pattern, deleted=deleted)


@event.listens_for(Session, "after_rollback")
def _drop_pending_invalidations(session: Session) -> None:
    session.info.pop(PENDING_KEY, None)
