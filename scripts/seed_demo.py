"""
Seed a demo recruiter, applicant and job posting.

Usage: python scripts/seed_demo.py   (uses the same DB_* / DATABASE_URL settings as the API)
"""
import sys
import os
import logging

# Ensure we can import resume_scanner modules
sys.path.append(os.getcwd())

from resume_scanner.core.exceptions import DuplicateEmailError
from resume_scanner.database import init_db
from resume_scanner.models.user import UserRole
from resume_scanner.services.auth import get_password_hash
from resume_scanner.storage import open_store

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("recruiter@example.com", "Recruiter123!", "Riley Recruiter", UserRole.RECRUITER),
    ("applicant@example.com", "Applicant123!", "Alex Applicant", UserRole.APPLICANT),
]


def seed():
    init_db()
    with open_store() as store:
        for email, password, name, role in DEMO_USERS:
            try:
                store.create_user(email, get_password_hash(password), name, role)
                logger.info(f"Created {role.value} -> {email}")
            except DuplicateEmailError:
                logger.warning(f"User {email} already exists. Skipping.")

        recruiter = store.get_user_by_email("recruiter@example.com")
        if not store.get_jobs_by_recruiter(recruiter.id):
            job = store.create_job(
                title="Full-Stack Engineer",
                description="Build and ship features across a React front end and Python services.",
                requirements="Python, React, TypeScript, SQL; Docker and AWS a plus.",
                recruiter_id=recruiter.id,
            )
            logger.info(f"Created job {job.id}: {job.title}")


if __name__ == "__main__":
    seed()
