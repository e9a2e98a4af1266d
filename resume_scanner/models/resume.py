from sqlalchemy import Column, String, Integer, JSON, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from resume_scanner.database import Base, utcnow
from resume_scanner.models.user import new_id


class Resume(Base):
    __tablename__ = "resumes"
    __table_args__ = (
        CheckConstraint("soft_skills_score BETWEEN 0 AND 100", name="ck_resume_soft_skills_range"),
        CheckConstraint("match_score BETWEEN 0 AND 100", name="ck_resume_match_range"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    applicant_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(String(36), ForeignKey("job_descriptions.id"), nullable=False, index=True)
    # File metadata plus mocked extracted fields; never the parsed document
    resume_data = Column(JSON, nullable=False)
    soft_skills_score = Column(Integer, nullable=False)
    match_score = Column(Integer, nullable=False)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)

    job = relationship("JobDescription", back_populates="resumes")
