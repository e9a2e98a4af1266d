import logging
from datetime import timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, status

from resume_scanner.core.config import settings
from resume_scanner.core.exceptions import AuthenticationError
from resume_scanner.core.limiter import limiter
from resume_scanner.routers.auth_deps import get_bearer_token
from resume_scanner.schemas.auth import (
    LoginRequest, RegisterResponse, Token, TokenRequest, UserCreate, UserResponse, VerifyResponse
)
from resume_scanner.schemas.common import MessageResponse
from resume_scanner.services import auth as auth_service
from resume_scanner.storage import CandidateStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def _pick_token(body: Optional[TokenRequest], header_token: Optional[str]) -> str:
    token = (body.token if body else None) or header_token
    if not token:
        raise AuthenticationError("Missing token")
    return token


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, store: CandidateStore = Depends(get_store)):
    user = store.create_user(
        email=user_in.email,
        password_hash=auth_service.get_password_hash(user_in.password),
        name=user_in.name,
        role=user_in.role,
    )
    logger.info(f"Registered {user.role.value} {user.email}")
    return {"id": user.id, "user": UserResponse.model_validate(user)}


@router.post("/login", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, store: CandidateStore = Depends(get_store)):
    # Note: Using JSON LoginRequest instead of form-data for frontend compatibility
    try:
        user = auth_service.authenticate(store, login_data.email, login_data.password, login_data.role)
    except AuthenticationError:
        logger.info(f"Failed login for {login_data.email}")
        raise

    token, expires_at = auth_service.issue_token(store, user)
    logger.info(f"User {user.email} logged in ({settings.auth_mode})")
    return {
        "token": token,
        "token_type": "bearer",
        "expires_at": expires_at.replace(tzinfo=timezone.utc),
        "user": UserResponse.model_validate(user),
    }


@router.post("/verify", response_model=VerifyResponse)
def verify(
    body: Optional[TokenRequest] = Body(default=None),
    header_token: Optional[str] = Depends(get_bearer_token),
    store: CandidateStore = Depends(get_store),
):
    """Check a token (from the body or the Authorization header) and return its user."""
    user = auth_service.resolve_token(store, _pick_token(body, header_token))
    return {"valid": True, "user": UserResponse.model_validate(user)}


@router.post("/logout", response_model=MessageResponse)
def logout(
    body: Optional[TokenRequest] = Body(default=None),
    header_token: Optional[str] = Depends(get_bearer_token),
    store: CandidateStore = Depends(get_store),
):
    token = (body.token if body else None) or header_token
    if token and auth_service.revoke_token(store, token):
        logger.info("Session revoked on logout")
    return {"message": "Successfully logged out"}
