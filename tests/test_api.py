"""
HTTP-level tests: auth, status codes and response envelopes.
"""
from jobtrack.core.pagination import MAX_PAGE
from jobtrack.core.security import create_access_token


def _create_application(client, headers, **body):
    payload = {"applied_date": "2026-01-15"}
    payload.update(body)
    response = client.post("/applications", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _create_company(client, headers, name):
    return client.post("/companies", json={"name": name}, headers=headers)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_missing_token_is_401(client):
    response = client.get("/companies")
    assert response.status_code == 401
    assert response.json()["error"] == "Authorization header is required"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_bad_token_is_401(client):
    response = client.get("/companies", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


def test_blank_subject_is_401(client):
    response = client.get("/companies", headers={"Authorization": f"Bearer {create_access_token({'sub': '   '})}"})
    assert response.status_code == 401


def test_company_get_or_create_status_codes(client, headers_a):
    created = _create_company(client, headers_a, "globex")
    assert created.status_code == 201
    assert created.json()["name"] == "Globex"

    again = _create_company(client, headers_a, "  GLOBEX ")
    assert again.status_code == 200
    assert again.json()["id"] == created.json()["id"]


def test_company_blank_name_is_400(client, headers_a):
    response = _create_company(client, headers_a, "   ")
    assert response.status_code == 400
    assert response.json()["fields"] == {"name": "Company name is required"}


def test_rename_conflict_returns_existing_company(client, headers_a):
    globex = _create_company(client, headers_a, "Globex").json()
    initech = _create_company(client, headers_a, "Initech").json()

    response = client.put(f"/companies/{globex['id']}", json={"name": "INITECH"}, headers=headers_a)
    assert response.status_code == 409
    assert response.json()["error"] == "Company name already exists"
    assert response.json()["company"]["id"] == initech["id"]

    assert client.get(f"/companies/{globex['id']}", headers=headers_a).json()["name"] == "Globex"


def test_list_meta_is_lenient(client, headers_a):
    for name in ["Alpha", "Bravo", "Charlie"]:
        _create_company(client, headers_a, name)

    response = client.get("/companies?page=abc&limit=1000", headers=headers_a)
    assert response.status_code == 200
    body = response.json()
    assert body["meta"] == {"page": 1, "limit": 100, "total_count": 3, "total_pages": 1}
    assert [company["name"] for company in body["data"]] == ["Alpha", "Bravo", "Charlie"]


def test_huge_page_is_an_empty_page(client, headers_a):
    _create_company(client, headers_a, "Alpha")

    for page in ["99999999999999999999999", "9223372036854775807"]:
        response = client.get(f"/companies?page={page}&limit=100", headers=headers_a)
        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["meta"]["page"] == MAX_PAGE
        assert body["meta"]["total_count"] == 1


def test_list_page_past_the_end(client, headers_a):
    _create_application(client, headers_a)
    body = client.get("/applications?page=999&limit=10", headers=headers_a).json()
    assert body["data"] == []
    assert body["meta"] == {"page": 999, "limit": 10, "total_count": 1, "total_pages": 1}


def test_other_owner_gets_404(client, headers_a, headers_b):
    company = _create_company(client, headers_a, "Globex").json()

    assert client.get(f"/companies/{company['id']}", headers=headers_b).status_code == 404
    assert client.delete(f"/companies/{company['id']}", headers=headers_b).status_code == 404
    assert client.get("/companies", headers=headers_b).json()["meta"]["total_count"] == 0


def test_application_validation_is_400(client, headers_a):
    response = client.post("/applications", json={"applied_date": "15/01/2026"}, headers=headers_a)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert "applied_date" in body["fields"]


def test_invalid_status_is_400(client, headers_a):
    response = client.post(
        "/applications", json={"applied_date": "2026-01-15", "status": "ghosted"}, headers=headers_a
    )
    assert response.status_code == 400
    assert response.json()["fields"] == {"status": "Invalid status"}


def test_status_filter_and_stats(client, headers_a):
    _create_application(client, headers_a)
    _create_application(client, headers_a, status="interview")

    filtered = client.get("/applications?status=interview", headers=headers_a).json()
    assert filtered["meta"]["total_count"] == 1
    assert filtered["data"][0]["status"] == "interview"

    unfiltered = client.get("/applications?status=", headers=headers_a).json()
    assert unfiltered["meta"]["total_count"] == 2

    stats = client.get("/applications/stats", headers=headers_a).json()
    assert stats["total"] == 2
    assert stats["by_status"]["applied"] == 1
    assert stats["by_status"]["interview"] == 1
    assert stats["by_status"]["offer"] == 0


def test_job_lifecycle(client, headers_a):
    application = _create_application(client, headers_a)
    company = _create_company(client, headers_a, "Globex").json()

    response = client.post(
        "/jobs",
        json={"application_id": application["id"], "company_id": company["id"], "title": "Engineer"},
        headers=headers_a,
    )
    assert response.status_code == 201
    job = response.json()

    assert client.get(f"/applications/{application['id']}/job", headers=headers_a).json()["id"] == job["id"]
    assert client.get(f"/companies/{company['id']}/jobs", headers=headers_a).json()["meta"]["total_count"] == 1

    # Company is still referenced by the job
    assert client.delete(f"/companies/{company['id']}", headers=headers_a).status_code == 409

    assert client.delete(f"/applications/{application['id']}", headers=headers_a).status_code == 204
    assert client.get(f"/jobs/{job['id']}", headers=headers_a).status_code == 404
    assert client.delete(f"/companies/{company['id']}", headers=headers_a).status_code == 204


def test_job_for_foreign_application_is_404(client, headers_a, headers_b):
    foreign = _create_application(client, headers_b)
    company = _create_company(client, headers_a, "Globex").json()

    response = client.post(
        "/jobs",
        json={"application_id": foreign["id"], "company_id": company["id"], "title": "Engineer"},
        headers=headers_a,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Application not found"
    assert client.get("/jobs", headers=headers_a).json()["meta"]["total_count"] == 0


def test_contact_crud(client, headers_a):
    response = client.post("/contacts", json={"name": "Jane Recruiter"}, headers=headers_a)
    assert response.status_code == 201
    contact = response.json()

    updated = client.put(f"/contacts/{contact['id']}", json={"email": "jane@acme.example"}, headers=headers_a)
    assert updated.json()["email"] == "jane@acme.example"
    assert updated.json()["name"] == "Jane Recruiter"

    assert client.delete(f"/contacts/{contact['id']}", headers=headers_a).status_code == 204
    assert client.get(f"/contacts/{contact['id']}", headers=headers_a).status_code == 404


def test_details_update(client, headers_a):
    application = _create_application(client, headers_a)
    company = _create_company(client, headers_a, "Globex").json()
    client.post(
        "/jobs",
        json={"application_id": application["id"], "company_id": company["id"], "title": "Engineer"},
        headers=headers_a,
    )

    response = client.put(
        f"/applications/{application['id']}/details",
        json={"company_name": "initech", "job": {"location": "Remote"}, "application": {"status": "offer"}},
        headers=headers_a,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["completed"] == ["company", "job", "application"]
    assert body["company"]["name"] == "Initech"
    assert body["job"]["location"] == "Remote"
    assert body["application"]["status"] == "offer"


def test_details_update_partial_is_207(client, headers_a):
    application = _create_application(client, headers_a)

    response = client.put(
        f"/applications/{application['id']}/details",
        json={"company_name": "Initech", "job": {"title": "Engineer"}, "application": {"status": "offer"}},
        headers=headers_a,
    )
    assert response.status_code == 207
    body = response.json()
    assert body["completed"] == ["company"]
    assert body["failed_step"] == "job"
    assert body["skipped"] == ["application"]
    assert body["error"] == {"error": "Job not found"}
    assert body["company"]["name"] == "Initech"
