from backend.app.models import Experience, Project, ProjectImage


def test_add_project_with_images(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    profile = create_profile()

    resp = client.post(
        "/api/v1/profile/projects",
        data={
            "name": "Toy Compiler",
            "description": "A compiler for a tiny language",
            "githubLink": "https://github.com/ada/toy-compiler",
            "liveLink": "",
            "imageUrls": "a.png, , b.png",
        },
        headers=headers,
    )

    assert resp.status_code == 201
    data = resp.json()
    assert data["profile_id"] == profile["id"]
    assert data["github_link"] == "https://github.com/ada/toy-compiler"
    assert data["live_link"] is None
    assert [img["url"] for img in data["images"]] == ["a.png", "b.png"]

    session = session_factory()
    assert session.query(ProjectImage).count() == 2
    assert session.query(Project).one().name == "Toy Compiler"
    session.close()


def test_add_project_without_images(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = client.post("/api/v1/profile/projects", data={"name": "Notes app"}, headers=headers)

    assert resp.status_code == 201
    assert resp.json()["images"] == []
    session = session_factory()
    assert session.query(ProjectImage).count() == 0
    session.close()


def test_add_project_without_profile(authorized_client):
    client, headers, _ = authorized_client

    resp = client.post("/api/v1/profile/projects", data={"name": "Orphan"}, headers=headers)

    assert resp.status_code == 404


def test_add_experience(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = client.post(
        "/api/v1/profile/experience",
        data={
            "company": "Acme",
            "position": "Backend Intern",
            "location": "Remote",
            "startDate": "2022-06-01",
            "endDate": "2022-08-31",
            "description": "Built internal tools",
        },
        headers=headers,
    )

    assert resp.status_code == 201
    data = resp.json()
    assert data["period"] == "Jun 2022 - Aug 2022"
    assert data["location"] == "Remote"
    session = session_factory()
    assert session.query(Experience).one().position == "Backend Intern"
    session.close()


def test_add_experience_rejects_bad_end_date(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = client.post(
        "/api/v1/profile/experience",
        data={"company": "Acme", "position": "Intern", "startDate": "2022-06-01", "endDate": "31/08/2022"},
        headers=headers,
    )

    assert resp.status_code == 422
    assert resp.json()["field"] == "endDate"
    session = session_factory()
    assert session.query(Experience).count() == 0
    session.close()
