"""
Profile management service functions.

Every mutating function takes the already-resolved caller, checks that the
target belongs to the caller's profile, writes through the repositories
and marks the caller's cached views stale. Nothing here commits: the
request session does that once the router returns, and only then are the
cached views dropped.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.cache import CacheKeys, cache, invalidate_after_commit
from core.config import get_settings
from core.errors import NotAuthorizedError, NotFoundError, ProfileExistsError
from core.logging import get_logger
from core.parsing import clean_text, parse_date, parse_optional_date, split_csv
from core.profile import linkedin_handle, month_range, name_initial, skill_label, year_range
from core.repositories import (
    EducationRepository,
    ExperienceRepository,
    ProfileRepository,
    ProjectRepository,
)

from ..models import Education, Experience, Profile, Project, Skill, User
from ..schemas import (
    EducationForm,
    EducationResponse,
    ExperienceForm,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileForm,
    ProfileResponse,
    ProjectForm,
    ProjectImageResponse,
    ProjectResponse,
    SkillResponse,
)

logger = get_logger("profile")


# =============================================================================
# Helpers
# =============================================================================


def invalidate_user_views(db: Session, user_id: int) -> None:
    """Drop every cached view of the user's profile once ``db`` commits."""
    invalidate_after_commit(db, CacheKeys.user_pattern(user_id))


def require_profile(db: Session, user: User) -> Profile:
    profile = ProfileRepository(db).get_by_user_id(user.id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def _owned_education(db: Session, profile: Profile, education_id: int) -> Education:
    """Load an education entry and check it belongs to ``profile``."""
    education = EducationRepository(db).get_by_id(education_id)
    if education is None:
        raise NotFoundError("Education not found or not authorized")
    if education.profile_id != profile.id:
        logger.warning(
            "education_access_denied",
            education_id=education_id,
            profile_id=profile.id,
        )
        raise NotAuthorizedError("Education not found or not authorized")
    return education


def _profile_columns(form: ProfileForm) -> dict[str, Any]:
    return {
        "name": form.name.strip(),
        "profession": clean_text(form.profession),
        "batch": clean_text(form.batch),
        "about": clean_text(form.about),
        "profile_image": clean_text(form.profile_image),
        "phone": clean_text(form.phone),
        "linkedin": clean_text(form.linkedin),
    }


def _education_columns(form: EducationForm) -> dict[str, Any]:
    return {
        "institution": form.institution.strip(),
        "degree": form.degree.strip(),
        "field": clean_text(form.field),
        "start_date": parse_date(form.start_date, "startDate"),
        "end_date": parse_optional_date(form.end_date, "endDate"),
        "description": clean_text(form.description),
    }


# =============================================================================
# Serialization
# =============================================================================


def skill_to_response(skill: Skill) -> SkillResponse:
    return SkillResponse(
        id=skill.id,
        name=skill.name,
        proficiency=skill.proficiency,
        label=skill_label(skill.name, skill.proficiency),
    )


def education_to_response(education: Education) -> EducationResponse:
    return EducationResponse(
        id=education.id,
        profile_id=education.profile_id,
        institution=education.institution,
        degree=education.degree,
        field=education.field,
        start_date=education.start_date,
        end_date=education.end_date,
        description=education.description,
        period=year_range(education.start_date, education.end_date),
    )


def experience_to_response(experience: Experience) -> ExperienceResponse:
    return ExperienceResponse(
        id=experience.id,
        profile_id=experience.profile_id,
        company=experience.company,
        position=experience.position,
        location=experience.location,
        start_date=experience.start_date,
        end_date=experience.end_date,
        description=experience.description,
        period=month_range(experience.start_date, experience.end_date),
    )


def project_to_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        profile_id=project.profile_id,
        name=project.name,
        description=project.description,
        github_link=project.github_link,
        live_link=project.live_link,
        images=[ProjectImageResponse.model_validate(image) for image in project.images],
    )


def _profile_fields(profile: Profile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "name": profile.name,
        "profession": profile.profession,
        "batch": profile.batch,
        "about": profile.about,
        "profile_image": profile.profile_image,
        "phone": profile.phone,
        "email": profile.email,
        "linkedin": profile.linkedin,
        "linkedin_handle": linkedin_handle(profile.linkedin),
        "initial": name_initial(profile.name),
        "skills": [skill_to_response(skill) for skill in profile.skills],
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(**_profile_fields(profile))


def profile_to_detail(profile: Profile) -> ProfileDetailResponse:
    """Serialize the whole aggregate; history is ordered most recent first."""
    by_start = lambda entry: (entry.start_date, entry.id)  # noqa: E731
    return ProfileDetailResponse(
        **_profile_fields(profile),
        education=[
            education_to_response(e) for e in sorted(profile.education, key=by_start, reverse=True)
        ],
        experience=[
            experience_to_response(e) for e in sorted(profile.experience, key=by_start, reverse=True)
        ],
        projects=[project_to_response(p) for p in profile.projects],
    )


# =============================================================================
# Profile
# =============================================================================


def create_profile(db: Session, user: User, form: ProfileForm) -> Profile:
    """
    Create the caller's profile and its skills.

    The contact email is copied from the user. A user has at most one
    profile; a second attempt raises ProfileExistsError.
    """
    repo = ProfileRepository(db)
    if repo.has_profile(user.id):
        raise ProfileExistsError()

    try:
        profile = repo.create(user_id=user.id, email=user.email, **_profile_columns(form))
    except IntegrityError:
        # Lost a race with a concurrent create for the same user
        raise ProfileExistsError() from None

    repo.add_skills(profile.id, split_csv(form.skills))
    db.refresh(profile)

    invalidate_user_views(db, user.id)
    logger.info("profile_created", user_id=user.id, profile_id=profile.id)
    return profile


def update_profile(db: Session, user: User, form: ProfileForm) -> Profile:
    """
    Overwrite the caller's profile fields and replace its skills.

    Skills are deleted and re-inserted from the submitted list; both steps
    share the request transaction.
    """
    repo = ProfileRepository(db)
    profile = require_profile(db, user)

    repo.update_fields(profile, **_profile_columns(form))
    skills = repo.replace_skills(profile, split_csv(form.skills))
    db.refresh(profile)

    invalidate_user_views(db, user.id)
    logger.info("profile_updated", user_id=user.id, profile_id=profile.id, skill_count=len(skills))
    return profile


def delete_profile(db: Session, user: User, user_id: int) -> None:
    """Delete the caller's profile and every child row."""
    if user_id != user.id:
        logger.warning("profile_delete_denied", user_id=user.id, target_user_id=user_id)
        raise NotAuthorizedError("Not authorized to delete this profile")

    profile = require_profile(db, user)
    ProfileRepository(db).delete(profile)

    invalidate_user_views(db, user.id)
    logger.info("profile_deleted", user_id=user.id)


def get_profile_view(db: Session, user: User) -> dict[str, Any]:
    """
    The profile page aggregate, served from cache when possible.

    Raises:
        NotFoundError: The caller has no profile yet and should create one.
    """

    def compute() -> dict[str, Any] | None:
        profile = ProfileRepository(db).get_full_by_user_id(user.id)
        if profile is None:
            return None
        return profile_to_detail(profile).model_dump(mode="json")

    view = cache.get_json_or_compute(
        CacheKeys.user_profile(user.id),
        compute,
        ttl=get_settings().profile_cache_ttl,
    )
    if view is None:
        raise NotFoundError("Profile not found. Create a profile first.")
    return view


# =============================================================================
# Education
# =============================================================================


def add_education(db: Session, user: User, form: EducationForm) -> Education:
    profile = require_profile(db, user)
    education = EducationRepository(db).create(profile_id=profile.id, **_education_columns(form))

    invalidate_user_views(db, user.id)
    logger.info("education_added", user_id=user.id, education_id=education.id)
    return education


def update_education(db: Session, user: User, education_id: int, form: EducationForm) -> Education:
    """Overwrite an education entry of the caller's profile."""
    profile = require_profile(db, user)
    education = _owned_education(db, profile, education_id)

    EducationRepository(db).update(education, **_education_columns(form))

    invalidate_user_views(db, user.id)
    logger.info("education_updated", user_id=user.id, education_id=education.id)
    return education


def delete_education(db: Session, user: User, education_id: int) -> None:
    profile = require_profile(db, user)
    education = _owned_education(db, profile, education_id)

    EducationRepository(db).delete(education)

    invalidate_user_views(db, user.id)
    logger.info("education_deleted", user_id=user.id, education_id=education_id)


def get_education(db: Session, user: User, education_id: int) -> Education:
    """One of the caller's education entries, e.g. to prefill the edit form."""
    profile = require_profile(db, user)
    return _owned_education(db, profile, education_id)


def list_education_view(db: Session, user: User) -> dict[str, Any]:
    """The caller's education, most recent first."""
    profile = require_profile(db, user)

    def compute() -> dict[str, Any]:
        entries = EducationRepository(db).list_for_profile(profile.id)
        return {"education": [education_to_response(e).model_dump(mode="json") for e in entries]}

    return cache.get_json_or_compute(
        CacheKeys.user_education(user.id),
        compute,
        ttl=get_settings().profile_cache_ttl,
    )


# =============================================================================
# Experience and projects
# =============================================================================


def add_experience(db: Session, user: User, form: ExperienceForm) -> Experience:
    profile = require_profile(db, user)
    experience = ExperienceRepository(db).create(
        profile_id=profile.id,
        company=form.company.strip(),
        position=form.position.strip(),
        location=clean_text(form.location),
        start_date=parse_date(form.start_date, "startDate"),
        end_date=parse_optional_date(form.end_date, "endDate"),
        description=clean_text(form.description),
    )

    invalidate_user_views(db, user.id)
    logger.info("experience_added", user_id=user.id, experience_id=experience.id)
    return experience


def add_project(db: Session, user: User, form: ProjectForm) -> Project:
    """Create a project with one image row per non-empty URL."""
    profile = require_profile(db, user)
    project = ProjectRepository(db).create_with_images(
        profile.id,
        split_csv(form.image_urls),
        name=form.name.strip(),
        description=clean_text(form.description),
        github_link=clean_text(form.github_link),
        live_link=clean_text(form.live_link),
    )

    invalidate_user_views(db, user.id)
    logger.info(
        "project_added",
        user_id=user.id,
        project_id=project.id,
        image_count=len(project.images),
    )
    return project
