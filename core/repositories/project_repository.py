"""Project repository."""

from core.models import Project, ProjectImage

from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    def create_with_images(self, profile_id: int, image_urls: list[str], **fields) -> Project:
        """Create a project and one image row per URL, in order."""
        project = Project(profile_id=profile_id, **fields)
        project.images = [ProjectImage(url=url) for url in image_urls]
        self.session.add(project)
        self.session.flush()
        return project
