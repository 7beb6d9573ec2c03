"""
Profile endpoints.

Mutations are form posts mirroring the profile pages' forms; reads return
the aggregate already shaped for display. Each request is one transaction.
"""

from fastapi import APIRouter, Depends, Form

from ..dependencies import (
    RequestContext,
    education_form,
    experience_form,
    get_request_context,
    profile_form,
    project_form,
)
from ..schemas import (
    DeletedResponse,
    EducationForm,
    EducationListResponse,
    EducationResponse,
    ExperienceForm,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileForm,
    ProfileResponse,
    ProjectForm,
    ProjectResponse,
)
from ..services import profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


# =============================================================================
# Profile
# =============================================================================


@router.get("", response_model=ProfileDetailResponse)
def get_profile(ctx: RequestContext = Depends(get_request_context)):
    """
    Get the caller's profile with skills, education, experience and projects.

    Returns 404 when the caller has not created a profile yet.
    """
    return profile_service.get_profile_view(ctx.db, ctx.user)


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(
    form: ProfileForm = Depends(profile_form),
    ctx: RequestContext = Depends(get_request_context),
) -> ProfileResponse:
    """Create the caller's profile. Skills are a comma-separated field."""
    profile = profile_service.create_profile(ctx.db, ctx.user, form)
    return profile_service.profile_to_response(profile)


@router.post("/update", response_model=ProfileResponse)
def update_profile(
    form: ProfileForm = Depends(profile_form),
    ctx: RequestContext = Depends(get_request_context),
) -> ProfileResponse:
    """Overwrite the caller's profile and replace its skills."""
    profile = profile_service.update_profile(ctx.db, ctx.user, form)
    return profile_service.profile_to_response(profile)


@router.delete("/{user_id}", response_model=DeletedResponse)
def delete_profile(user_id: int, ctx: RequestContext = Depends(get_request_context)):
    profile_service.delete_profile(ctx.db, ctx.user, user_id)
    return DeletedResponse()


# =============================================================================
# Education
# =============================================================================


@router.get("/education", response_model=EducationListResponse)
def list_education(ctx: RequestContext = Depends(get_request_context)):
    """The caller's education entries, most recent first."""
    return profile_service.list_education_view(ctx.db, ctx.user)


@router.get("/education/{education_id}", response_model=EducationResponse)
def get_education(education_id: int, ctx: RequestContext = Depends(get_request_context)):
    education = profile_service.get_education(ctx.db, ctx.user, education_id)
    return profile_service.education_to_response(education)


@router.post("/education", response_model=EducationResponse, status_code=201)
def add_education(
    form: EducationForm = Depends(education_form),
    ctx: RequestContext = Depends(get_request_context),
):
    education = profile_service.add_education(ctx.db, ctx.user, form)
    return profile_service.education_to_response(education)


@router.post("/education/update", response_model=EducationResponse)
def update_education(
    education_id: int = Form(..., alias="educationId"),
    form: EducationForm = Depends(education_form),
    ctx: RequestContext = Depends(get_request_context),
):
    """Update an entry; ``educationId`` travels as a hidden form field."""
    education = profile_service.update_education(ctx.db, ctx.user, education_id, form)
    return profile_service.education_to_response(education)


@router.delete("/education/{education_id}", response_model=DeletedResponse)
def delete_education(education_id: int, ctx: RequestContext = Depends(get_request_context)):
    profile_service.delete_education(ctx.db, ctx.user, education_id)
    return DeletedResponse()


# =============================================================================
# Experience and projects
# =============================================================================


@router.post("/experience", response_model=ExperienceResponse, status_code=201)
def add_experience(
    form: ExperienceForm = Depends(experience_form),
    ctx: RequestContext = Depends(get_request_context),
):
    experience = profile_service.add_experience(ctx.db, ctx.user, form)
    return profile_service.experience_to_response(experience)


@router.post("/projects", response_model=ProjectResponse, status_code=201)
def add_project(
    form: ProjectForm = Depends(project_form),
    ctx: RequestContext = Depends(get_request_context),
):
    """Create a project; ``imageUrls`` is a comma-separated list of media URLs."""
    project = profile_service.add_project(ctx.db, ctx.user, form)
    return profile_service.project_to_response(project)
