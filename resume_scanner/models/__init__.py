# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, job, resume

# Explicit class exports for cleaner imports
from .user import User, UserRole, UserSession
from .job import JobDescription, JobStatus
from .resume import Resume

__all__ = [
    "User",
    "UserRole",
    "UserSession",
    "JobDescription",
    "JobStatus",
    "Resume",
]
