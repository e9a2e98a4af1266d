import logging
from typing import List

from fastapi import APIRouter, Depends, status

from resume_scanner.models.user import User
from resume_scanner.routers.auth_deps import get_current_user, require_recruiter
from resume_scanner.schemas.job import JobCreate, JobResponse
from resume_scanner.storage import CandidateStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobCreate,
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(require_recruiter),
):
    """
    Create a new job posting owned by the calling recruiter.
    """
    job = store.create_job(
        title=job_in.title,
        description=job_in.description,
        requirements=job_in.requirements,
        recruiter_id=current_user.id,
        status=job_in.status,
    )
    logger.info(f"Recruiter {current_user.id} created job {job.id} ({job.status.value})")
    return job


@router.get("", response_model=List[JobResponse])
def get_jobs(
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """
    List active jobs, newest first.
    """
    return store.get_all_jobs()


@router.get("/recruiter/{recruiter_id}", response_model=List[JobResponse])
def get_jobs_by_recruiter(
    recruiter_id: str,
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return store.get_jobs_by_recruiter(recruiter_id)
