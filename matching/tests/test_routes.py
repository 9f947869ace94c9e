"""
API tests: auth, catalog, qualifications, applications and matching endpoints.
"""

from sqlalchemy.exc import SQLAlchemyError

from matching.logic import runner


def register_and_login(client, email="kofi@example.com", password="secret123", name="Kofi Boateng"):
    response = client.post("/auth/register", json={"email": email, "password": password, "name": name})
    assert response.status_code == 201
    return login(client, email, password)


def login(client, email, password):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def admin_headers(client):
    return login(client, "admin@example.com", "admin-password")


def create_program(client, headers, requirements):
    university = client.post("/universities", json={"name": "KNUST", "location": "Kumasi"}, headers=headers).json()
    department = client.post(
        "/departments",
        json={"university_id": university["id"], "name": "Engineering", "code": "eng"},
        headers=headers,
    ).json()
    response = client.post(
        "/programs",
        json={"department_id": department["id"], "name": "BSc Computer Engineering", "requirements": requirements},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/matches/health").json()["engine"] == "matching"


def test_register_login_and_me(client):
    headers = register_and_login(client)

    me = client.get("/users/me", headers=headers).json()
    assert me["email"] == "kofi@example.com"
    assert me["role"] == "STUDENT"
    assert me["student_id"]

    duplicate = client.post("/auth/register", json={"email": "kofi@example.com", "password": "secret123", "name": "K"})
    assert duplicate.status_code == 400


def test_session_cookie_authenticates(client):
    register_and_login(client)
    # TestClient keeps the cookie set on login
    assert client.get("/users/me").status_code == 200

    client.post("/auth/logout")
    assert client.get("/users/me").status_code == 401


def test_bad_credentials(client):
    response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "whatever"})
    assert response.status_code == 401
    assert client.get("/users/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401


def test_students_cannot_manage_catalog(client):
    headers = register_and_login(client)
    response = client.post("/universities", json={"name": "UCC", "location": "Cape Coast"}, headers=headers)
    assert response.status_code == 403


def test_matching_flow(client):
    admin = admin_headers(client)
    program = create_program(client, admin, [
        {"type": "GRADE", "subject": "Mathematics", "min_grade": "B3", "description": "Credit in Mathematics"},
        {"type": "LANGUAGE", "subject": "IELTS", "min_grade": "6.5", "description": "IELTS 6.5"},
    ])
    assert len(program["requirements"]) == 2

    student = register_and_login(client)
    maths = client.post(
        "/qualifications",
        json={"type": "HIGH_SCHOOL", "subject": "Mathematics", "grade": "B2"},
        headers=student,
    ).json()
    assert maths["verified"] is False

    # Nothing verified yet
    assert client.get("/matches", headers=student).json()["matches"] == []

    verified = client.post(f"/qualifications/{maths['id']}/verify", headers=admin)
    assert verified.status_code == 200
    assert verified.json()["verified"] is True

    body = client.get("/matches", headers=student).json()
    assert len(body["matches"]) == 1
    match = body["matches"][0]
    assert match["program_id"] == program["id"]
    assert match["match_score"] == 50
    assert [r["status"] for r in match["requirements"]] == ["met", "not-met"]

    student_id = client.get("/users/me", headers=student).json()["student_id"]
    admin_view = client.get(f"/matches/students/{student_id}", headers=admin).json()
    assert admin_view["matches"][0]["match_score"] == 50


def test_student_edit_resets_verification(client):
    admin = admin_headers(client)
    student = register_and_login(client)
    qualification = client.post(
        "/qualifications",
        json={"type": "HIGH_SCHOOL", "subject": "English", "grade": "C4"},
        headers=student,
    ).json()
    client.post(f"/qualifications/{qualification['id']}/verify", headers=admin)

    updated = client.patch(f"/qualifications/{qualification['id']}", json={"grade": "B2"}, headers=student).json()
    assert updated["grade"] == "B2"
    assert updated["verified"] is False


def test_students_cannot_verify_or_see_others(client):
    first = register_and_login(client)
    qualification = client.post(
        "/qualifications",
        json={"type": "HIGH_SCHOOL", "subject": "English", "grade": "C4"},
        headers=first,
    ).json()

    assert client.post(f"/qualifications/{qualification['id']}/verify", headers=first).status_code == 403

    second = register_and_login(client, email="esi@example.com", name="Esi Owusu")
    assert client.delete(f"/qualifications/{qualification['id']}", headers=second).status_code == 403
    assert client.get("/qualifications", headers=second).json() == []


def test_apply_once(client):
    admin = admin_headers(client)
    program = create_program(client, admin, [
        {"type": "GRADE", "subject": "Mathematics", "min_grade": "C6", "description": "Maths"},
    ])
    student = register_and_login(client)

    first = client.post("/applications", json={"program_id": program["id"]}, headers=student)
    assert first.status_code == 201
    assert first.json()["status"] == "PENDING"
    assert client.post("/applications", json={"program_id": program["id"]}, headers=student).status_code == 409

    updated = client.patch(
        f"/applications/{first.json()['id']}/status",
        json={"status": "APPROVED"},
        headers=admin,
    )
    assert updated.json()["status"] == "APPROVED"

    # Programs with applications cannot be deleted
    assert client.delete(f"/programs/{program['id']}", headers=admin).status_code == 409


def test_evaluate_requirement_endpoint(client):
    admin = admin_headers(client)
    response = client.post(
        "/matches/evaluate-requirement",
        json={
            "qualification": {"type": "HIGH_SCHOOL", "subject": "Mathematics", "grade": "C5"},
            "requirement": {"type": "GRADE", "subject": "Mathematics", "min_grade": "B3"},
        },
        headers=admin,
    )
    assert response.json() == {"matches": False, "reason": "Grade too low: C5 < B3"}


def test_estimate_is_anonymous(client):
    response = client.post(
        "/matches/estimate",
        json={
            "profile": {"grade": "A1", "english_score": 9.0, "extracurriculars": 5, "work_experience_years": 4},
            "programs": [{"program_name": "MBA", "min_grade": "C6"}],
        },
    )
    assert response.status_code == 200
    assert response.json()[0]["estimate"] == 100


def test_matching_unavailable_returns_503(client, monkeypatch):
    student = register_and_login(client)

    def broken(db):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(runner, "fetch_program_candidates", broken)

    response = client.get("/matches", headers=student)
    assert response.status_code == 503
    assert response.json() == {"detail": "Unable to compute matches right now"}
