"""
Authentication and role dependencies for FastAPI endpoints.
"""
import logging
from typing import Callable, List, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from resume_scanner.core.exceptions import AccessDeniedError, AuthenticationError
from resume_scanner.models.user import User, UserRole
from resume_scanner.services import auth as auth_service
from resume_scanner.storage import CandidateStore, get_store

logger = logging.getLogger(__name__)

# auto_error=False so a missing header renders through our own 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    store: CandidateStore = Depends(get_store),
) -> User:
    """
    Resolves the bearer token (JWT or session id) to the calling user.
    """
    if not token:
        raise AuthenticationError("Missing bearer token")
    try:
        return auth_service.resolve_token(store, token)
    except AuthenticationError as e:
        logger.info(f"Authentication failed: {e.message}")
        raise


def require_role(allowed_roles: List[UserRole]) -> Callable:
    """
    Dependency factory that checks if the user has one of the allowed roles.

    Usage:
        @router.post("/jobs")
        def create_job(user: User = Depends(require_role([UserRole.RECRUITER]))):
            ...
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise AccessDeniedError(
                f"Access denied. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user
    return role_checker


require_recruiter = require_role([UserRole.RECRUITER])
require_applicant = require_role([UserRole.APPLICANT])
