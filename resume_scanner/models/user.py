"""
User accounts and login sessions.
"""
import uuid
import enum

from sqlalchemy import Column, String, Enum, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from resume_scanner.database import Base, utcnow


def new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    """
    - RECRUITER: posts jobs and reviews the resumes submitted to them
    - APPLICANT: browses active jobs and uploads resumes
    """
    RECRUITER = "recruiter"
    APPLICANT = "applicant"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    jobs = relationship("JobDescription", back_populates="recruiter")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_recruiter(self) -> bool:
        return self.role == UserRole.RECRUITER


class UserSession(Base):
    __tablename__ = "sessions"

    # Opaque bearer token handed to the client
    id = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_type = Column(String(20), nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="sessions")
