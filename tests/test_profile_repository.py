from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from core.models import Education, Profile, Project, ProjectImage, Skill
from core.repositories import (
    EducationRepository,
    ProfileRepository,
    ProjectRepository,
)


def test_second_profile_for_user_violates_unique_constraint(test_session, user_with_profile):
    user_id, _ = user_with_profile

    test_session.add(Profile(user_id=user_id, name="Duplicate"))
    with pytest.raises(IntegrityError):
        test_session.flush()
    test_session.rollback()


def test_replace_skills_keeps_order_and_duplicates(test_session, user_with_profile):
    user_id, profile_id = user_with_profile
    repo = ProfileRepository(test_session)
    profile = repo.get_by_id(profile_id)
    repo.add_skills(profile_id, ["Python", "SQL"])

    repo.replace_skills(profile, ["Go", "Go", "Rust"])

    assert [s.name for s in profile.skills] == ["Go", "Go", "Rust"]
    assert test_session.query(Skill).count() == 3


def test_get_full_by_user_id_loads_children(test_session, user_with_profile):
    user_id, profile_id = user_with_profile
    ProfileRepository(test_session).add_skills(profile_id, ["Python"])
    ProjectRepository(test_session).create_with_images(profile_id, ["a.png", "b.png"], name="Compiler")
    test_session.commit()
    test_session.expunge_all()

    profile = ProfileRepository(test_session).get_full_by_user_id(user_id)

    assert [s.name for s in profile.skills] == ["Python"]
    assert [img.url for img in profile.projects[0].images] == ["a.png", "b.png"]


def test_education_listed_most_recent_first(test_session, user_with_profile):
    _, profile_id = user_with_profile
    repo = EducationRepository(test_session)
    for institution, start in [("B", 2015), ("C", 2021), ("A", 2018)]:
        repo.create(
            profile_id=profile_id,
            institution=institution,
            degree="BSc",
            start_date=datetime(start, 9, 1),
        )

    assert [e.institution for e in repo.list_for_profile(profile_id)] == ["C", "A", "B"]


def test_deleting_profile_cascades_to_children(test_session, user_with_profile):
    _, profile_id = user_with_profile
    repo = ProfileRepository(test_session)
    repo.add_skills(profile_id, ["Python"])
    EducationRepository(test_session).create(
        profile_id=profile_id, institution="MIT", degree="BSc", start_date=datetime(2019, 9, 1)
    )
    ProjectRepository(test_session).create_with_images(profile_id, ["a.png"], name="Compiler")
    test_session.commit()
    test_session.expunge_all()

    repo.delete(repo.get_by_id(profile_id))
    test_session.commit()

    for model in (Skill, Education, Project, ProjectImage):
        assert test_session.query(model).count() == 0
