from datetime import datetime, timedelta, timezone

from fastapi import status

from resume_scanner.database import utcnow
from resume_scanner.services import auth as auth_service

REGISTRATION = {
    "email": "new.user@acme.com",
    "password": "Password123!",
    "name": "New User",
    "role": "applicant",
}


def test_register(client):
    response = client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] == data["user"]["id"]
    assert data["user"]["email"] == REGISTRATION["email"]
    assert data["user"]["role"] == "applicant"
    assert "password" not in data["user"]


def test_register_duplicate_email_fails(client):
    """The second registration with the same email is rejected."""
    assert client.post("/api/auth/register", json=REGISTRATION).status_code == 201

    response = client.post("/api/auth/register", json={**REGISTRATION, "name": "Someone Else"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Email already exists"}


def test_register_rejects_unknown_role(client):
    response = client.post("/api/auth/register", json={**REGISTRATION, "role": "admin"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "role" in response.json()["error"]


def test_register_strips_name(client):
    response = client.post("/api/auth/register", json={**REGISTRATION, "name": "  New User  "})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["name"] == "New User"


def test_register_rejects_blank_name(client, store):
    response = client.post("/api/auth/register", json={**REGISTRATION, "name": "   "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"].startswith("name:")
    assert store.get_user_by_email(REGISTRATION["email"]) is None


def test_login_success(client, recruiter):
    """Test successful login with valid credentials."""
    response = client.post(
        "/api/auth/login", json={"email": recruiter.email, "password": "Password123!"}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == recruiter.id
    expires_at = datetime.fromisoformat(data["expires_at"].replace("Z", "+00:00"))
    assert expires_at.utcoffset() == timedelta(0)
    assert expires_at > datetime.now(timezone.utc)


def test_login_invalid_credentials(client, recruiter):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"email": recruiter.email, "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Invalid credentials"}


def test_login_wrong_portal_role(client, recruiter):
    response = client.post(
        "/api/auth/login",
        json={"email": recruiter.email, "password": "Password123!", "role": "applicant"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_verify_with_header(client, applicant, auth_headers):
    response = client.post("/api/auth/verify", headers=auth_headers(applicant))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["valid"] is True
    assert response.json()["user"]["id"] == applicant.id


def test_verify_with_body(client, applicant, store):
    token, _ = auth_service.issue_token(store, applicant)
    response = client.post("/api/auth/verify", json={"token": token})
    assert response.status_code == status.HTTP_200_OK


def test_verify_rejects_expired_token(client, applicant):
    token = auth_service.create_access_token(
        {"sub": applicant.id}, expires_delta=timedelta(minutes=-1)
    )
    response = client.post("/api/auth/verify", json={"token": token})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Token expired"}


def test_verify_without_token(client):
    response = client.post("/api/auth/verify")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_session_login_verify_logout(client, applicant, session_mode):
    login = client.post(
        "/api/auth/login",
        json={"email": applicant.email, "password": "Password123!", "role": "applicant"},
    )
    assert login.status_code == status.HTTP_200_OK
    session_id = login.json()["token"]

    assert client.post("/api/auth/verify", json={"token": session_id}).status_code == 200

    logout = client.post("/api/auth/logout", json={"token": session_id})
    assert logout.status_code == status.HTTP_200_OK

    assert client.post("/api/auth/verify", json={"token": session_id}).status_code == 401


def test_verify_rejects_expired_session(client, applicant, store, session_mode):
    session = store.create_session(applicant.id, "applicant", utcnow() - timedelta(seconds=1))
    response = client.post(
        "/api/auth/verify", headers={"Authorization": f"Bearer {session.id}"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_protected_route_requires_token(client):
    response = client.get("/api/jobs")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_get_user_profile(client, recruiter, applicant, auth_headers):
    response = client.get(f"/api/users/{recruiter.id}", headers=auth_headers(applicant))
    assert response.status_code == 200
    assert response.json()["name"] == "Rita Recruiter"

    missing = client.get("/api/users/nope", headers=auth_headers(applicant))
    assert missing.status_code == 404
