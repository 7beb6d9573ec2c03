from datetime import datetime

from backend.app.models import Education

EDUCATION_FORM = {
    "institution": "State University",
    "degree": "BSc",
    "field": "Computer Science",
    "startDate": "2019-09-01",
    "endDate": "2023-06-15",
    "description": "Systems track",
}


def _add(client, headers, **overrides):
    return client.post("/api/v1/profile/education", data={**EDUCATION_FORM, **overrides}, headers=headers)


def _load(session_factory, education_id):
    session = session_factory()
    try:
        return session.get(Education, education_id)
    finally:
        session.close()


def test_add_education(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    profile = create_profile()

    resp = _add(client, headers)

    assert resp.status_code == 201
    data = resp.json()
    assert data["profile_id"] == profile["id"]
    assert data["period"] == "2019 - 2023"
    stored = _load(session_factory, data["id"])
    assert stored.start_date == datetime(2019, 9, 1)
    assert stored.end_date == datetime(2023, 6, 15)


def test_blank_end_date_is_ongoing(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = _add(client, headers, endDate="")

    assert resp.status_code == 201
    data = resp.json()
    assert data["end_date"] is None
    assert data["period"] == "2019 - Present"
    assert _load(session_factory, data["id"]).end_date is None


def test_iso_timestamp_dates_are_accepted(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = _add(client, headers, startDate="2019-09-01T00:00:00.000Z", endDate="")

    assert resp.status_code == 201
    assert _load(session_factory, resp.json()["id"]).start_date == datetime(2019, 9, 1)


def test_invalid_start_date_is_rejected(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()

    resp = _add(client, headers, startDate="not-a-date")

    assert resp.status_code == 422
    assert resp.json()["field"] == "startDate"
    session = session_factory()
    assert session.query(Education).count() == 0
    session.close()


def test_missing_start_date_is_rejected(authorized_client, create_profile):
    client, headers, _ = authorized_client
    create_profile()

    resp = _add(client, headers, startDate="")

    assert resp.status_code == 422


def test_add_education_without_profile(authorized_client):
    client, headers, _ = authorized_client

    resp = _add(client, headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Profile not found"


def test_update_education(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()
    education_id = _add(client, headers).json()["id"]

    resp = client.post(
        "/api/v1/profile/education/update",
        data={**EDUCATION_FORM, "educationId": str(education_id), "degree": "MSc", "endDate": ""},
        headers=headers,
    )

    assert resp.status_code == 200
    assert resp.json()["period"] == "2019 - Present"
    stored = _load(session_factory, education_id)
    assert stored.degree == "MSc"
    assert stored.end_date is None


def test_update_missing_education_returns_404(authorized_client, create_profile):
    client, headers, _ = authorized_client
    create_profile()

    resp = client.post(
        "/api/v1/profile/education/update",
        data={**EDUCATION_FORM, "educationId": "9999"},
        headers=headers,
    )

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Education not found or not authorized"


def test_update_other_users_education_is_forbidden(authorized_client, create_profile, other_headers):
    client, headers, session_factory = authorized_client
    create_profile(request_headers=other_headers, name="Grace Other")
    foreign_id = _add(client, other_headers).json()["id"]
    create_profile()

    resp = client.post(
        "/api/v1/profile/education/update",
        data={**EDUCATION_FORM, "educationId": str(foreign_id), "institution": "Hijacked"},
        headers=headers,
    )

    assert resp.status_code == 403
    assert resp.json()["detail"] == "Education not found or not authorized"
    assert _load(session_factory, foreign_id).institution == "State University"


def test_delete_other_users_education_is_forbidden(authorized_client, create_profile, other_headers):
    client, headers, session_factory = authorized_client
    create_profile(request_headers=other_headers, name="Grace Other")
    foreign_id = _add(client, other_headers).json()["id"]
    create_profile()

    resp = client.delete(f"/api/v1/profile/education/{foreign_id}", headers=headers)

    assert resp.status_code == 403
    assert _load(session_factory, foreign_id) is not None


def test_delete_education(authorized_client, create_profile):
    client, headers, session_factory = authorized_client
    create_profile()
    education_id = _add(client, headers).json()["id"]

    resp = client.delete(f"/api/v1/profile/education/{education_id}", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"status": "deleted"}
    assert _load(session_factory, education_id) is None


def test_list_education_most_recent_first(authorized_client, create_profile):
    client, headers, _ = authorized_client
    create_profile()
    _add(client, headers, institution="High School", startDate="2015-09-01", endDate="2019-06-01")
    _add(client, headers, institution="Grad School", startDate="2023-09-01", endDate="")
    _add(client, headers, institution="State University")

    resp = client.get("/api/v1/profile/education", headers=headers)

    assert resp.status_code == 200
    entries = resp.json()["education"]
    assert [e["institution"] for e in entries] == ["Grad School", "State University", "High School"]
    assert entries[0]["period"] == "2023 - Present"


def test_get_single_education_checks_ownership(authorized_client, create_profile, other_headers):
    client, headers, _ = authorized_client
    create_profile()
    own_id = _add(client, headers).json()["id"]
    create_profile(request_headers=other_headers, name="Grace Other")

    assert client.get(f"/api/v1/profile/education/{own_id}", headers=headers).json()["degree"] == "BSc"
    assert client.get(f"/api/v1/profile/education/{own_id}", headers=other_headers).status_code == 403
