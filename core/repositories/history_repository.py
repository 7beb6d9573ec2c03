"""Education and experience repositories."""

from core.models import Education, Experience

from .base import BaseRepository


class EducationRepository(BaseRepository[Education]):
    model = Education

    def list_for_profile(self, profile_id: int) -> list[Education]:
        """Most recent first."""
        return (
            self.session.query(Education)
            .filter(Education.profile_id == profile_id)
            .order_by(Education.start_date.desc(), Education.id.desc())
            .all()
        )


class ExperienceRepository(BaseRepository[Experience]):
    model = Experience
