from fastapi import APIRouter
from resume_scanner.routers import auth, users, jobs, resumes, analysis

# Centralized API router hub; main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(jobs.router, tags=["Jobs"])
api_router.include_router(resumes.router, tags=["Resumes"])
api_router.include_router(analysis.router, tags=["Analysis"])
