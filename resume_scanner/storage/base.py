"""
Storage contract shared by every backend.

Routers and services only talk to a CandidateStore; whether rows live in
SQLite, PostgreSQL, MySQL or process memory is decided by configuration.
"""
import secrets
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from resume_scanner.models.job import JobDescription, JobStatus
from resume_scanner.models.resume import Resume
from resume_scanner.models.user import User, UserRole, UserSession


def new_session_id() -> str:
    return secrets.token_hex(32)


class CandidateStore(ABC):

    # --- users ---

    @abstractmethod
    def create_user(self, email: str, password_hash: str, name: str, role: UserRole) -> User:
        """Insert a user. Raises DuplicateEmailError if the email is taken."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]: ...

    # --- jobs ---

    @abstractmethod
    def create_job(
        self,
        title: str,
        description: str,
        requirements: str,
        recruiter_id: str,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> JobDescription: ...

    @abstractmethod
    def get_job(self, job_id: str) -> Optional[JobDescription]: ...

    @abstractmethod
    def get_all_jobs(self) -> List[JobDescription]:
        """Active jobs, newest first."""

    @abstractmethod
    def get_jobs_by_recruiter(self, recruiter_id: str) -> List[JobDescription]:
        """Every job the recruiter owns regardless of status, newest first."""

    # --- resumes ---

    @abstractmethod
    def save_resume(
        self,
        applicant_id: str,
        job_id: str,
        resume_data: Dict[str, Any],
        soft_skills_score: int,
        match_score: int,
    ) -> Resume: ...

    @abstractmethod
    def get_resume(self, resume_id: str) -> Optional[Resume]: ...

    @abstractmethod
    def get_resumes_by_job(self, job_id: str) -> List[Resume]:
        """Ranked by soft-skills score, highest first."""

    @abstractmethod
    def get_resumes_by_applicant(self, applicant_id: str) -> List[Resume]:
        """Most recent upload first."""

    # --- sessions ---

    @abstractmethod
    def create_session(self, user_id: str, user_type: str, expires_at: datetime) -> UserSession: ...

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[UserSession]: ...

    @abstractmethod
    def delete_session(self, session_id: str) -> bool: ...

    @abstractmethod
    def delete_expired_sessions(self, now: datetime) -> int: ...

    # --- health ---

    @abstractmethod
    def ping(self) -> None:
        """Raise if the backend cannot serve requests."""
