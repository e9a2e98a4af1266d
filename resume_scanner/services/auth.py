"""
Authentication Service - password hashing and bearer tokens.

Two token flavours are supported, selected by AUTH_MODE:
- jwt: signed, self-contained access tokens (stateless)
- session: opaque ids backed by a row in the sessions table
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from resume_scanner.core.config import settings
from resume_scanner.core.exceptions import AuthenticationError
from resume_scanner.database import utcnow
from resume_scanner.models.user import User, UserRole
from resume_scanner.storage.base import CandidateStore

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_EXPIRED = "Token expired"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash in storage
        return False


# --- JWT ---

def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Returns the claims, {"error": "TOKEN_EXPIRED"} for an expired token,
    or None when the token cannot be trusted.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except JWTError:
        return None


def _user_claims(user: User) -> Dict[str, Any]:
    return {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value if hasattr(user.role, "value") else user.role,
        "name": user.name,
    }


# --- Login / token lifecycle ---

def authenticate(store: CandidateStore, email: str, password: str, role: Optional[UserRole] = None) -> User:
    user = store.get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    if role is not None and user.role != role:
        logger.info(f"Login for {email} rejected: requested role {role.value}, stored {user.role.value}")
        raise AuthenticationError("Invalid credentials")
    return user


def issue_token(store: CandidateStore, user: User) -> Tuple[str, datetime]:
    """Issue a bearer token for the configured AUTH_MODE. Returns (token, naive UTC expiry)."""
    if settings.auth_mode == "session":
        expires_at = utcnow() + timedelta(hours=settings.session_ttl_hours)
        session = store.create_session(user.id, user.role.value, expires_at)
        return session.id, expires_at

    expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(_user_claims(user), expires_delta=expires_delta)
    return token, utcnow() + expires_delta


def resolve_token(store: CandidateStore, token: str) -> User:
    """Map a bearer token to its user or raise AuthenticationError."""
    if not token:
        raise AuthenticationError("Missing bearer token")

    if settings.auth_mode == "session":
        session = store.get_session(token)
        if session is None:
            raise AuthenticationError("Invalid or expired session")
        if session.expires_at <= utcnow():
            store.delete_session(token)
            raise AuthenticationError("Invalid or expired session")
        user_id = session.user_id
    else:
        payload = decode_access_token(token)
        if payload is None:
            raise AuthenticationError("Invalid token")
        if payload.get("error") == "TOKEN_EXPIRED":
            raise AuthenticationError(TOKEN_EXPIRED)
        if payload.get("type") != "access" or not payload.get("sub"):
            raise AuthenticationError("Invalid token")
        user_id = payload["sub"]

    user = store.get_user_by_id(user_id)
    if user is None:
        logger.warning(f"Authentication failed: user {user_id} no longer exists")
        raise AuthenticationError("User not found")
    return user


def revoke_token(store: CandidateStore, token: str) -> bool:
    """Session ids are deleted; JWTs are stateless and simply expire."""
    if settings.auth_mode == "session":
        return store.delete_session(token)
    return False
