from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List
from datetime import datetime


class ResumeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    applicant_id: str
    job_id: str
    resume_data: Dict[str, Any]
    soft_skills_score: int
    match_score: int
    uploaded_at: datetime


# --- MOCK ANALYSIS ---

class KeywordMatch(BaseModel):
    text: str
    matched: bool


class SkillGap(BaseModel):
    name: str
    missing: bool


class AnalysisResponse(BaseModel):
    softSkillsScore: int
    matchScore: int
    keywords: List[KeywordMatch]
    skills: List[SkillGap]
    suggestions: List[str]
