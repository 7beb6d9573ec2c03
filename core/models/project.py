"""
Portfolio project SQLAlchemy models.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .profile import Profile


class Project(Base):
    """A portfolio project with optional repository and demo links."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    live_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    profile: Mapped["Profile"] = relationship("Profile", back_populates="projects")
    images: Mapped[list["ProjectImage"]] = relationship(
        "ProjectImage",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProjectImage.id",
    )


class ProjectImage(Base):
    """Screenshot of a project, stored on the media host."""

    __tablename__ = "project_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), index=True
    )
    url: Mapped[str] = mapped_column(String(1024))

    project: Mapped["Project"] = relationship("Project", back_populates="images")
