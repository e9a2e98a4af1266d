import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resume_scanner.core.exceptions import DuplicateEmailError
from resume_scanner.models.job import JobDescription, JobStatus
from resume_scanner.models.resume import Resume
from resume_scanner.models.user import User, UserRole, UserSession
from resume_scanner.storage.base import CandidateStore, new_session_id

logger = logging.getLogger(__name__)


class SQLAlchemyStore(CandidateStore):
    """
    CandidateStore over a SQLAlchemy Session.
    One instance per request; every write commits immediately.
    """

    def __init__(self, db: Session):
        self.db = db

    def _add(self, obj):
        self.db.add(obj)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(obj)
        return obj

    def create_user(self, email: str, password_hash: str, name: str, role: UserRole) -> User:
        user = User(email=email, password_hash=password_hash, name=name, role=role)
        try:
            return self._add(user)
        except IntegrityError as e:
            logger.info(f"Rejected duplicate registration for {email}: {e.orig}")
            raise DuplicateEmailError()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create_job(
        self,
        title: str,
        description: str,
        requirements: str,
        recruiter_id: str,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> JobDescription:
        job = JobDescription(
            title=title,
            description=description,
            requirements=requirements,
            recruiter_id=recruiter_id,
            status=status,
        )
        return self._add(job)

    def get_job(self, job_id: str) -> Optional[JobDescription]:
        return self.db.query(JobDescription).filter(JobDescription.id == job_id).first()

    def get_all_jobs(self) -> List[JobDescription]:
        return (
            self.db.query(JobDescription)
            .filter(JobDescription.status == JobStatus.ACTIVE)
            .order_by(JobDescription.created_at.desc())
            .all()
        )

    def get_jobs_by_recruiter(self, recruiter_id: str) -> List[JobDescription]:
        return (
            self.db.query(JobDescription)
            .filter(JobDescription.recruiter_id == recruiter_id)
            .order_by(JobDescription.created_at.desc())
            .all()
        )

    def save_resume(
        self,
        applicant_id: str,
        job_id: str,
        resume_data: Dict[str, Any],
        soft_skills_score: int,
        match_score: int,
    ) -> Resume:
        resume = Resume(
            applicant_id=applicant_id,
            job_id=job_id,
            resume_data=resume_data,
            soft_skills_score=soft_skills_score,
            match_score=match_score,
        )
        return self._add(resume)

    def get_resume(self, resume_id: str) -> Optional[Resume]:
        return self.db.query(Resume).filter(Resume.id == resume_id).first()

    def get_resumes_by_job(self, job_id: str) -> List[Resume]:
        return (
            self.db.query(Resume)
            .filter(Resume.job_id == job_id)
            .order_by(Resume.soft_skills_score.desc(), Resume.uploaded_at.desc())
            .all()
        )

    def get_resumes_by_applicant(self, applicant_id: str) -> List[Resume]:
        return (
            self.db.query(Resume)
            .filter(Resume.applicant_id == applicant_id)
            .order_by(Resume.uploaded_at.desc())
            .all()
        )

    def create_session(self, user_id: str, user_type: str, expires_at: datetime) -> UserSession:
        session = UserSession(
            id=new_session_id(),
            user_id=user_id,
            user_type=user_type,
            expires_at=expires_at,
        )
        return self._add(session)

    def get_session(self, session_id: str) -> Optional[UserSession]:
        return self.db.query(UserSession).filter(UserSession.id == session_id).first()

    def delete_session(self, session_id: str) -> bool:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.id == session_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def delete_expired_sessions(self, now: datetime) -> int:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    def ping(self) -> None:
        self.db.execute(text("SELECT 1"))
