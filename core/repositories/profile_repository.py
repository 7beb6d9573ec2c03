"""Student profile repository."""

from datetime import datetime, timezone

from sqlalchemy.orm import selectinload

from core.models import Profile, Project, Skill

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile and its skills."""

    model = Profile

    def get_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile by user ID."""
        return self.session.query(Profile).filter(Profile.user_id == user_id).first()

    def get_full_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile with every child collection loaded, for display."""
        return (
            self.session.query(Profile)
            .options(
                selectinload(Profile.skills),
                selectinload(Profile.education),
                selectinload(Profile.experience),
                selectinload(Profile.projects).selectinload(Project.images),
            )
            .filter(Profile.user_id == user_id)
            .first()
        )

    def update_fields(self, profile: Profile, **fields) -> Profile:
        """Overwrite scalar fields and bump ``updated_at``."""
        fields["updated_at"] = datetime.now(timezone.utc)
        return self.update(profile, **fields)

    def add_skills(self, profile_id: int, names: list[str]) -> list[Skill]:
        skills = [Skill(profile_id=profile_id, name=name) for name in names]
        self.session.add_all(skills)
        self.session.flush()
        return skills

    def replace_skills(self, profile: Profile, names: list[str]) -> list[Skill]:
        """
        Delete every skill of the profile, then insert ``names``.

        Ids and proficiencies of unchanged skills are not preserved. Both
        statements run in the caller's transaction.
        """
        self.session.query(Skill).filter(Skill.profile_id == profile.id).delete(
            synchronize_session=False
        )
        # The bulk delete bypasses the ORM; drop the stale collection
        self.session.expire(profile, ["skills"])
        return self.add_skills(profile.id, names)

    def has_profile(self, user_id: int) -> bool:
        """Check if a user has a profile (efficient exists query)."""
        return self.exists_where(user_id=user_id)
