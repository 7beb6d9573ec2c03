"""
Form payload dependencies.

The frontend posts flat form fields under camelCase names; each dependency
gathers them into the matching schema. Blank optional fields arrive as
empty strings and are normalized by the service layer.
"""

from fastapi import Form

from ..schemas import EducationForm, ExperienceForm, ProfileForm, ProjectForm


def profile_form(
    name: str = Form(...),
    profession: str | None = Form(None),
    batch: str | None = Form(None),
    about: str | None = Form(None),
    profile_image: str | None = Form(None, alias="profileImage"),
    phone: str | None = Form(None),
    linkedin: str | None = Form(None),
    skills: str | None = Form(None),
) -> ProfileForm:
    return ProfileForm(
        name=name,
        profession=profession,
        batch=batch,
        about=about,
        profile_image=profile_image,
        phone=phone,
        linkedin=linkedin,
        skills=skills,
    )


def education_form(
    institution: str = Form(...),
    degree: str = Form(...),
    field: str | None = Form(None),
    start_date: str | None = Form(None, alias="startDate"),
    end_date: str | None = Form(None, alias="endDate"),
    description: str | None = Form(None),
) -> EducationForm:
    return EducationForm(
        institution=institution,
        degree=degree,
        field=field,
        start_date=start_date,
        end_date=end_date,
        description=description,
    )


def experience_form(
    company: str = Form(...),
    position: str = Form(...),
    location: str | None = Form(None),
    start_date: str | None = Form(None, alias="startDate"),
    end_date: str | None = Form(None, alias="endDate"),
    description: str | None = Form(None),
) -> ExperienceForm:
    return ExperienceForm(
        company=company,
        position=position,
        location=location,
        start_date=start_date,
        end_date=end_date,
        description=description,
    )


def project_form(
    name: str = Form(...),
    description: str | None = Form(None),
    github_link: str | None = Form(None, alias="githubLink"),
    live_link: str | None = Form(None, alias="liveLink"),
    image_urls: str | None = Form(None, alias="imageUrls"),
) -> ProjectForm:
    return ProjectForm(
        name=name,
        description=description,
        github_link=github_link,
        live_link=live_link,
        image_urls=image_urls,
    )
