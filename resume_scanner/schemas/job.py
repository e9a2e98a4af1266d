from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from resume_scanner.models.job import JobStatus


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    status: JobStatus = JobStatus.ACTIVE


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    requirements: str
    recruiter_id: str
    status: JobStatus
    created_at: datetime
