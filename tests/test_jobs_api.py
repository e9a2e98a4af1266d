from fastapi import status

JOB = {
    "title": "Data Engineer",
    "description": "Build pipelines.",
    "requirements": "Python, SQL, AWS",
}


def test_recruiter_creates_job(client, recruiter, auth_headers):
    response = client.post("/api/jobs", json=JOB, headers=auth_headers(recruiter))
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"]
    assert data["recruiter_id"] == recruiter.id
    assert data["status"] == "active"


def test_applicant_cannot_create_job(client, applicant, auth_headers):
    response = client.post("/api/jobs", json=JOB, headers=auth_headers(applicant))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert "error" in response.json()


def test_missing_fields_rejected(client, recruiter, auth_headers):
    response = client.post("/api/jobs", json={"title": "No body"}, headers=auth_headers(recruiter))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_job_text_is_stored_verbatim(client, recruiter, auth_headers):
    payload = {
        "title": "R&D Engineer",
        "description": "Bachelor's in CS, <b>remote</b>",
        "requirements": "C++ & Go, 5 < years",
    }
    created = client.post("/api/jobs", json=payload, headers=auth_headers(recruiter))
    assert created.status_code == 201

    listed = client.get(f"/api/jobs/recruiter/{recruiter.id}", headers=auth_headers(recruiter)).json()
    for job in (created.json(), listed[0]):
        assert {k: job[k] for k in payload} == payload


def test_job_list_shows_only_active(client, recruiter, applicant, auth_headers):
    active = client.post("/api/jobs", json=JOB, headers=auth_headers(recruiter)).json()
    inactive = client.post(
        "/api/jobs", json={**JOB, "title": "Paused", "status": "inactive"}, headers=auth_headers(recruiter)
    ).json()

    listed = client.get("/api/jobs", headers=auth_headers(applicant)).json()
    ids = [j["id"] for j in listed]
    assert active["id"] in ids
    assert inactive["id"] not in ids


def test_jobs_by_recruiter_include_inactive(client, recruiter, make_user, auth_headers):
    other = make_user("other.recruiter@acme.com", recruiter.role)
    client.post("/api/jobs", json=JOB, headers=auth_headers(recruiter))
    client.post("/api/jobs", json={**JOB, "status": "inactive"}, headers=auth_headers(recruiter))
    client.post("/api/jobs", json=JOB, headers=auth_headers(other))

    response = client.get(f"/api/jobs/recruiter/{recruiter.id}", headers=auth_headers(recruiter))
    assert response.status_code == 200
    jobs = response.json()
    assert len(jobs) == 2
    assert {j["status"] for j in jobs} == {"active", "inactive"}
    assert all(j["recruiter_id"] == recruiter.id for j in jobs)
