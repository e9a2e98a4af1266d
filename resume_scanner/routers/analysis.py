from fastapi import APIRouter, Depends, File, Form, UploadFile

from resume_scanner.models.user import User
from resume_scanner.routers.auth_deps import get_current_user
from resume_scanner.schemas.resume import AnalysisResponse
from resume_scanner.services.analysis import ResumeAnalyzer, get_analyzer
from resume_scanner.services.uploads import read_resume_upload

router = APIRouter(tags=["Analysis"])


@router.post("/analyze-resume", response_model=AnalysisResponse)
async def analyze_resume(
    resume: UploadFile = File(...),
    jobDescription: str = Form(...),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    current_user: User = Depends(get_current_user),
):
    """Score a resume against free-text job description. Nothing is persisted."""
    file_meta = await read_resume_upload(resume)
    return await analyzer.analyze(jobDescription, file_meta["fileName"])
