"""
Pydantic schemas for form payloads and display-shaped responses.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    auth_subject: str
    name: str | None = None
    email: str | None = None


# =============================================================================
# Form payloads
#
# Routers collect the flat form fields (camelCase names, as the frontend
# posts them) into these models; everything stays a raw string until the
# service layer parses it.
# =============================================================================


class ProfileForm(BaseModel):
    name: str
    profession: str | None = None
    batch: str | None = None
    about: str | None = None
    profile_image: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    skills: str | None = None


class EducationForm(BaseModel):
    institution: str
    degree: str
    field: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class ExperienceForm(BaseModel):
    company: str
    position: str
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class ProjectForm(BaseModel):
    name: str
    description: str | None = None
    github_link: str | None = None
    live_link: str | None = None
    image_urls: str | None = None


# =============================================================================
# Responses
# =============================================================================


class SkillResponse(BaseModel):
    id: int
    name: str
    proficiency: str | None = None
    label: str


class EducationResponse(BaseModel):
    id: int
    profile_id: int
    institution: str
    degree: str
    field: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    description: str | None = None
    period: str = Field(description='"2019 - 2023" or "2021 - Present"')


class ExperienceResponse(BaseModel):
    id: int
    profile_id: int
    company: str
    position: str
    location: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    description: str | None = None
    period: str = Field(description='"Jun 2022 - Aug 2022" or "Jan 2024 - Present"')


class ProjectImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: int
    name: str
    description: str | None = None
    github_link: str | None = None
    live_link: str | None = None
    images: list[ProjectImageResponse] = Field(default_factory=list)


class ProfileResponse(BaseModel):
    """Profile scalars plus the fields the page renders directly."""

    id: int
    user_id: int
    name: str
    profession: str | None = None
    batch: str | None = None
    about: str | None = None
    profile_image: str | None = None
    phone: str | None = None
    email: str | None = None
    linkedin: str | None = None
    linkedin_handle: str | None = None
    initial: str = ""
    skills: list[SkillResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileDetailResponse(ProfileResponse):
    """The whole aggregate, as shown on the profile page."""

    education: list[EducationResponse] = Field(default_factory=list)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    projects: list[ProjectResponse] = Field(default_factory=list)


class EducationListResponse(BaseModel):
    education: list[EducationResponse]


class DeletedResponse(BaseModel):
    status: str = "deleted"


class MediaDeleteRequest(BaseModel):
    public_id: str = Field(alias="publicId", min_length=1)


class MediaUploadResponse(BaseModel):
    secure_url: str
    public_id: str
