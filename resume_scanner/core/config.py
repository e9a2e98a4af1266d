import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class UploadSettings(BaseModel):
    max_bytes: int = 5 * 1024 * 1024
    allowed_content_types: List[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]


class Config(BaseModel):
    app_name: str = "Resume Scanner"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    port: int = int(os.getenv("PORT", "3001"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage: sqlite | postgresql | mysql | memory
    db_backend: str = os.getenv("DB_BACKEND", "sqlite").lower()
    database_url: Optional[str] = os.getenv("DATABASE_URL") or None
    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: Optional[int] = int(os.getenv("DB_PORT")) if os.getenv("DB_PORT") else None
    db_name: str = os.getenv("DB_NAME", "resume_scanner")
    db_user: Optional[str] = os.getenv("DB_USER") or None
    db_password: Optional[str] = os.getenv("DB_PASSWORD") or None

    # Auth: jwt | session
    auth_mode: str = os.getenv("AUTH_MODE", "jwt").lower()
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 24 hours
    session_ttl_hours: int = 24
    session_sweep_interval_seconds: float = float(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", "3600"))

    # Mock scoring
    analysis_delay_seconds: float = float(os.getenv("ANALYSIS_DELAY_SECONDS", "2.0"))

    uploads: UploadSettings = UploadSettings()

    # Rate limiting
    rate_limit_enabled: bool = _env_flag("RATE_LIMIT_ENABLED", "true")
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "10/minute")
    upload_rate_limit: str = os.getenv("UPLOAD_RATE_LIMIT", "10/minute")

    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173,"
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)

# Placeholder values such as the one in .env.example
PLACEHOLDER_JWT_SECRETS = ("change-me", "changeme", "secret")


def check_jwt_secret(config: Config) -> None:
    insecure = "dev-only" in config.jwt_secret or config.jwt_secret.strip().lower() in PLACEHOLDER_JWT_SECRETS
    if not insecure:
        return
    if config.environment not in ("development", "testing"):
        raise RuntimeError(
            "FATAL: JWT_SECRET must be set for non-development environments. "
            "Set it as an environment variable."
        )
    _logger.warning("Using insecure JWT_SECRET; only acceptable in development.")


check_jwt_secret(settings)
