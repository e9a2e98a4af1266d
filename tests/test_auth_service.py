from datetime import timedelta

import pytest

from resume_scanner.core.exceptions import AuthenticationError
from resume_scanner.database import utcnow
from resume_scanner.models.user import UserRole
from resume_scanner.services import auth as auth_service


def test_password_hashing():
    """Test that password hashing and verification works correctly."""
    password = "MySecurePassword123!"
    hashed = auth_service.get_password_hash(password)
    assert hashed != password
    assert auth_service.verify_password(password, hashed)
    assert not auth_service.verify_password("WrongPassword", hashed)


def test_verify_password_with_garbage_hash():
    assert not auth_service.verify_password("anything", "not-a-bcrypt-hash")


def test_jwt_round_trip(store, applicant):
    token, expires_at = auth_service.issue_token(store, applicant)
    assert expires_at > utcnow()
    assert auth_service.resolve_token(store, token).id == applicant.id

    claims = auth_service.decode_access_token(token)
    assert claims["sub"] == applicant.id
    assert claims["role"] == "applicant"
    assert claims["type"] == "access"


def test_expired_jwt_is_rejected(store, applicant):
    token = auth_service.create_access_token(
        {"sub": applicant.id, "email": applicant.email}, expires_delta=timedelta(seconds=-5)
    )
    assert auth_service.decode_access_token(token) == {"error": "TOKEN_EXPIRED"}
    with pytest.raises(AuthenticationError) as exc:
        auth_service.resolve_token(store, token)
    assert exc.value.message == auth_service.TOKEN_EXPIRED


def test_tampered_jwt_is_rejected(store, applicant):
    token, _ = auth_service.issue_token(store, applicant)
    with pytest.raises(AuthenticationError):
        auth_service.resolve_token(store, token[:-2] + ("aa" if token[-2:] != "aa" else "bb"))


def test_session_token_round_trip(store, applicant, session_mode):
    token, _ = auth_service.issue_token(store, applicant)
    assert len(token) == 64
    assert store.get_session(token).user_type == "applicant"
    assert auth_service.resolve_token(store, token).id == applicant.id

    assert auth_service.revoke_token(store, token)
    with pytest.raises(AuthenticationError):
        auth_service.resolve_token(store, token)


def test_expired_session_is_rejected_and_removed(store, applicant, session_mode):
    session_id = store.create_session(applicant.id, "applicant", utcnow() - timedelta(minutes=1)).id
    with pytest.raises(AuthenticationError):
        auth_service.resolve_token(store, session_id)
    assert store.get_session(session_id) is None


def test_authenticate_checks_requested_role(store, recruiter):
    assert auth_service.authenticate(store, recruiter.email, "Password123!").id == recruiter.id
    assert auth_service.authenticate(store, recruiter.email, "Password123!", UserRole.RECRUITER)
    with pytest.raises(AuthenticationError):
        auth_service.authenticate(store, recruiter.email, "Password123!", UserRole.APPLICANT)
