import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from resume_scanner.core.config import settings
from resume_scanner.core.exceptions import AccessDeniedError, AppException, NotFoundError
from resume_scanner.core.limiter import limiter
from resume_scanner.models.user import User
from resume_scanner.routers.auth_deps import get_current_user, require_applicant, require_recruiter
from resume_scanner.schemas.resume import ResumeResponse
from resume_scanner.services.analysis import ResumeAnalyzer, get_analyzer
from resume_scanner.services.uploads import read_resume_upload
from resume_scanner.storage import CandidateStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


def _parse_resume_data(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        raise AppException("resume_data must be valid JSON", error_code="INVALID_RESUME_DATA")
    if not isinstance(data, dict):
        raise AppException("resume_data must be a JSON object", error_code="INVALID_RESUME_DATA")
    return data


def _check_score(name: str, value: Optional[int]) -> None:
    if value is not None and not 0 <= value <= 100:
        raise AppException(f"{name} must be between 0 and 100", error_code="INVALID_SCORE")


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.upload_rate_limit)
async def submit_resume(
    request: Request,
    resume: UploadFile = File(...),
    job_id: str = Form(...),
    soft_skills_score: Optional[int] = Form(None),
    match_score: Optional[int] = Form(None),
    resume_data: Optional[str] = Form(None),
    store: CandidateStore = Depends(get_store),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    current_user: User = Depends(require_applicant),
):
    """
    Submit a resume for a job. Scores not supplied by the client are
    produced by the mock analyzer against the job's description.
    """
    file_meta = await read_resume_upload(resume)
    extracted = _parse_resume_data(resume_data)
    _check_score("soft_skills_score", soft_skills_score)
    _check_score("match_score", match_score)

    job = store.get_job(job_id)
    if not job:
        raise NotFoundError("Job")
    if not job.is_active:
        raise AppException("Job is not accepting applications", error_code="JOB_INACTIVE")

    if soft_skills_score is None or match_score is None:
        analysis = await analyzer.analyze(f"{job.description} {job.requirements}", file_meta["fileName"])
        if soft_skills_score is None:
            soft_skills_score = analysis["softSkillsScore"]
        if match_score is None:
            match_score = analysis["matchScore"]

    saved = store.save_resume(
        applicant_id=current_user.id,
        job_id=job.id,
        resume_data={**extracted, **file_meta},
        soft_skills_score=soft_skills_score,
        match_score=match_score,
    )
    logger.info(
        f"Applicant {current_user.id} applied to job {job.id}",
        extra={"resume_id": saved.id, "soft_skills_score": soft_skills_score, "match_score": match_score},
    )
    return saved


@router.get("/job/{job_id}", response_model=List[ResumeResponse])
def get_resumes_by_job(
    job_id: str,
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(require_recruiter),
):
    """
    Applicants for one of the caller's jobs, best soft-skills score first.
    """
    job = store.get_job(job_id)
    if not job:
        raise NotFoundError("Job")
    if job.recruiter_id != current_user.id:
        raise AccessDeniedError("You can only view resumes for your own job postings")
    return store.get_resumes_by_job(job_id)


@router.get("/applicant/{applicant_id}", response_model=List[ResumeResponse])
def get_resumes_by_applicant(
    applicant_id: str,
    store: CandidateStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if applicant_id != current_user.id:
        raise AccessDeniedError("You can only view your own applications")
    return store.get_resumes_by_applicant(applicant_id)
