"""Base repository class with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Repositories only flush; the session owner (the request) commits.

    Usage:
        class SkillRepository(BaseRepository[Skill]):
            model = Skill

        repo = SkillRepository(session)
        skill = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> T:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def update(self, instance: T, **kwargs) -> T:
        """Overwrite the given columns on an already-loaded record."""
        for key, value in kwargs.items():
            if not hasattr(instance, key):
                raise ValueError(f"Unknown column '{key}' for {self.model.__name__}")
            setattr(instance, key, value)
        self.session.flush()
        return instance

    def delete(self, instance: T) -> None:
        self.session.delete(instance)
        self.session.flush()

    def count(self, **filters) -> int:
        """Get count of records, optionally filtered."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        return self._apply_filters(query, filters).scalar() or 0

    def exists_where(self, **filters) -> bool:
        """Check if any record exists matching filters."""
        query = self._apply_filters(self.session.query(self.model), filters)
        result = self.session.query(query.exists()).scalar()
        return bool(result) if result is not None else False

    def _apply_filters(self, query: Query, filters: dict[str, Any]) -> Query:
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter key '{key}' for {self.model.__name__}")
            query = query.filter(getattr(self.model, key) == value)
        return query
