import enum

from sqlalchemy import Column, String, Text, Enum, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from resume_scanner.database import Base, utcnow
from resume_scanner.models.user import new_id


class JobStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class JobDescription(Base):
    __tablename__ = "job_descriptions"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    recruiter_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(JobStatus, name="job_status", values_callable=lambda e: [m.value for m in e]),
        default=JobStatus.ACTIVE,
        nullable=False,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    recruiter = relationship("User", back_populates="jobs")
    resumes = relationship("Resume", back_populates="job")

    @property
    def is_active(self) -> bool:
        return self.status == JobStatus.ACTIVE
