"""
Mock resume analysis.

Placeholder scoring: keyword matches are weighted coin flips and the
soft-skills score is uniform noise. Nothing here reads the resume.
"""
import asyncio
import logging
import random
from typing import Any, Dict, List, Optional

from resume_scanner.core.config import settings

logger = logging.getLogger(__name__)

KEYWORDS = [
    "Python",
    "React",
    "TypeScript",
    "Machine Learning",
    "Data Analysis",
    "AWS",
    "Docker",
    "SQL",
]
MATCH_PROBABILITY = 0.7
SOFT_SKILLS_RANGE = (60, 100)
MAX_SUGGESTIONS = 5

GENERAL_SUGGESTION = "Quantify your achievements with specific metrics"


class ResumeAnalyzer:
    def __init__(self, rng: Optional[random.Random] = None, delay_seconds: Optional[float] = None):
        self.rng = rng or random.Random()
        self.delay_seconds = settings.analysis_delay_seconds if delay_seconds is None else delay_seconds

    def score(self) -> Dict[str, Any]:
        keywords = [
            {"text": keyword, "matched": self.rng.random() < MATCH_PROBABILITY}
            for keyword in KEYWORDS
        ]
        matched = sum(1 for k in keywords if k["matched"])
        missing = [k["text"] for k in keywords if not k["matched"]]

        suggestions: List[str] = [
            f"Highlight any experience with {name} from the job description" for name in missing
        ]
        suggestions.append(GENERAL_SUGGESTION)

        return {
            "softSkillsScore": self.rng.randint(*SOFT_SKILLS_RANGE),
            "matchScore": round(matched / len(keywords) * 100),
            "keywords": keywords,
            "skills": [{"name": k["text"], "missing": not k["matched"]} for k in keywords],
            "suggestions": suggestions[:MAX_SUGGESTIONS],
        }

    async def analyze(self, job_description: str, filename: str = "") -> Dict[str, Any]:
        logger.info(
            "Analyzing resume",
            extra={"resume_file": filename, "job_description_chars": len(job_description or "")},
        )
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        result = self.score()
        logger.info(
            f"Analysis complete: match={result['matchScore']} soft_skills={result['softSkillsScore']}"
        )
        return result


def get_analyzer() -> ResumeAnalyzer:
    return ResumeAnalyzer()
