import copy
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

from resume_scanner.core.exceptions import DuplicateEmailError
from resume_scanner.database import utcnow
from resume_scanner.models.job import JobDescription, JobStatus
from resume_scanner.models.resume import Resume
from resume_scanner.models.user import User, UserRole, UserSession, new_id
from resume_scanner.storage.base import CandidateStore, new_session_id


def _snapshot(obj):
    """Detached copy of a stored row; callers never hold the stored instance."""
    if obj is None:
        return None
    cls = type(obj)
    return cls(**{c.key: copy.deepcopy(getattr(obj, c.key)) for c in cls.__table__.columns})


class InMemoryStore(CandidateStore):
    """
    Process-local CandidateStore for demos and tests.
    Returns transient copies of the ORM model classes, never the stored rows.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        self._user_ids_by_email: Dict[str, str] = {}
        self._jobs: Dict[str, JobDescription] = {}
        self._resumes: Dict[str, Resume] = {}
        self._sessions: Dict[str, UserSession] = {}

    def create_user(self, email: str, password_hash: str, name: str, role: UserRole) -> User:
        with self._lock:
            if email in self._user_ids_by_email:
                raise DuplicateEmailError()
            user = User(
                id=new_id(),
                email=email,
                password_hash=password_hash,
                name=name,
                role=role,
                created_at=utcnow(),
            )
            self._users[user.id] = user
            self._user_ids_by_email[email] = user.id
            return _snapshot(user)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_ids_by_email.get(email)
            return _snapshot(self._users.get(user_id)) if user_id else None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return _snapshot(self._users.get(user_id))

    def create_job(
        self,
        title: str,
        description: str,
        requirements: str,
        recruiter_id: str,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> JobDescription:
        job = JobDescription(
            id=new_id(),
            title=title,
            description=description,
            requirements=requirements,
            recruiter_id=recruiter_id,
            status=status,
            created_at=utcnow(),
        )
        with self._lock:
            self._jobs[job.id] = job
        return _snapshot(job)

    def get_job(self, job_id: str) -> Optional[JobDescription]:
        with self._lock:
            return _snapshot(self._jobs.get(job_id))

    def get_all_jobs(self) -> List[JobDescription]:
        with self._lock:
            jobs = [_snapshot(j) for j in self._jobs.values() if j.status == JobStatus.ACTIVE]
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)

    def get_jobs_by_recruiter(self, recruiter_id: str) -> List[JobDescription]:
        with self._lock:
            jobs = [_snapshot(j) for j in self._jobs.values() if j.recruiter_id == recruiter_id]
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)

    def save_resume(
        self,
        applicant_id: str,
        job_id: str,
        resume_data: Dict[str, Any],
        soft_skills_score: int,
        match_score: int,
    ) -> Resume:
        resume = Resume(
            id=new_id(),
            applicant_id=applicant_id,
            job_id=job_id,
            resume_data=copy.deepcopy(resume_data),
            soft_skills_score=soft_skills_score,
            match_score=match_score,
            uploaded_at=utcnow(),
        )
        with self._lock:
            self._resumes[resume.id] = resume
        return _snapshot(resume)

    def get_resume(self, resume_id: str) -> Optional[Resume]:
        with self._lock:
            return _snapshot(self._resumes.get(resume_id))

    def get_resumes_by_job(self, job_id: str) -> List[Resume]:
        with self._lock:
            resumes = [_snapshot(r) for r in self._resumes.values() if r.job_id == job_id]
        return sorted(resumes, key=lambda r: (r.soft_skills_score, r.uploaded_at), reverse=True)

    def get_resumes_by_applicant(self, applicant_id: str) -> List[Resume]:
        with self._lock:
            resumes = [_snapshot(r) for r in self._resumes.values() if r.applicant_id == applicant_id]
        return sorted(resumes, key=lambda r: r.uploaded_at, reverse=True)

    def create_session(self, user_id: str, user_type: str, expires_at: datetime) -> UserSession:
        session = UserSession(
            id=new_session_id(),
            user_id=user_id,
            user_type=user_type,
            expires_at=expires_at,
            created_at=utcnow(),
        )
        with self._lock:
            self._sessions[session.id] = session
        return _snapshot(session)

    def get_session(self, session_id: str) -> Optional[UserSession]:
        with self._lock:
            return _snapshot(self._sessions.get(session_id))

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def delete_expired_sessions(self, now: datetime) -> int:
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.expires_at <= now]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def ping(self) -> None:
        return None
