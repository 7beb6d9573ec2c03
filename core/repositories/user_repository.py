"""User repository for identity resolution."""

from datetime import datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite

from core.logging import get_logger
from core.models import User

from .base import BaseRepository

logger = get_logger("repository.user")

# INSERT ... ON CONFLICT builders for the supported backends
_DIALECT_INSERT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_subject(self, auth_subject: str) -> User | None:
        """Get user by the identity provider's subject id."""
        return self.session.query(User).filter(User.auth_subject == auth_subject).first()

    def upsert_from_identity(
        self,
        auth_subject: str,
        name: str | None = None,
        email: str | None = None,
    ) -> User:
        """
        Create the user on first sight, otherwise refresh name/email.

        The provider is the source of truth: whatever the session carries
        overwrites the stored values, including blanks.
        """
        user = self.get_by_subject(auth_subject)

        if user is None:
            return self._insert_or_refresh(auth_subject, name, email)

        user.name = name
        user.email = email
        user.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return user

    def _insert_or_refresh(self, auth_subject: str, name: str | None, email: str | None) -> User:
        """
        Insert a first-seen subject in one statement.

        Overlapping first requests for the same subject may both miss the
        lookup; the loser's insert turns into an update instead of failing
        on the unique constraint.
        """
        dialect = self.session.get_bind().dialect.name
        insert = _DIALECT_INSERT.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect for user upsert: {dialect}")

        now = datetime.now(timezone.utc)
        stmt = insert(User).values(
            auth_subject=auth_subject,
            name=name,
            email=email,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.auth_subject],
            set_={"name": name, "email": email, "updated_at": now},
        )
        self.session.execute(stmt)

        user = (
            self.session.query(User)
            .filter(User.auth_subject == auth_subject)
            .populate_existing()
            .one()
        )
        logger.info("user_registered", auth_subject=auth_subject, user_id=user.id)
        return user
