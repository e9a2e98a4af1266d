import os
import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DB_BACKEND"] = "sqlite"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTH_MODE"] = "jwt"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ANALYSIS_DELAY_SECONDS"] = "0"

from fastapi.testclient import TestClient

from resume_scanner.core.config import settings
from resume_scanner.database import Base
from resume_scanner.main import app
from resume_scanner.models.user import UserRole
from resume_scanner.services import auth as auth_service
from resume_scanner.services.analysis import ResumeAnalyzer, get_analyzer
from resume_scanner.storage import InMemoryStore, SQLAlchemyStore, get_store

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def engine():
    """A fresh in-memory database per test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture(scope="function")
def store(db_session):
    return SQLAlchemyStore(db_session)


@pytest.fixture(params=["sql", "memory"])
def any_store(request, db_session):
    """Runs a test once per storage backend."""
    if request.param == "sql":
        return SQLAlchemyStore(db_session)
    return InMemoryStore()


@pytest.fixture(scope="function")
def session_mode(monkeypatch):
    monkeypatch.setattr(settings, "auth_mode", "session")


@pytest.fixture(scope="function")
def make_user(store):
    def _make_user(email, role, password="Password123!", name="Test User"):
        return store.create_user(
            email=email,
            password_hash=auth_service.get_password_hash(password),
            name=name,
            role=UserRole(role),
        )
    return _make_user


@pytest.fixture(scope="function")
def recruiter(make_user):
    return make_user("recruiter@acme.com", UserRole.RECRUITER, name="Rita Recruiter")


@pytest.fixture(scope="function")
def applicant(make_user):
    return make_user("applicant@acme.com", UserRole.APPLICANT, name="Andy Applicant")


@pytest.fixture(scope="function")
def auth_headers(store):
    """Helper fixture issuing a bearer token for the active AUTH_MODE."""
    def _auth_headers(user):
        token, _ = auth_service.issue_token(store, user)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture(scope="function")
def job(store, recruiter):
    return store.create_job(
        title="Backend Engineer",
        description="Own our Python APIs.",
        requirements="Python, SQL, Docker",
        recruiter_id=recruiter.id,
    )


@pytest.fixture(scope="function")
def client(store):
    """Get a TestClient that uses the test store via dependency override."""
    def override_get_store():
        yield store

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_analyzer] = lambda: ResumeAnalyzer(rng=random.Random(7), delay_seconds=0)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
