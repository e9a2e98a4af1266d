"""
Resume Scanner - FastAPI Application

Recruiters post jobs and review ranked applicants; applicants upload
resumes and receive (mock) match and soft-skills scores.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Union

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import resume_scanner.models  # Force model registration with SQLAlchemy
from resume_scanner.core.config import settings
from resume_scanner.core.exceptions import AppException
from resume_scanner.core.limiter import limiter
from resume_scanner.core.logging import setup_logging
from resume_scanner.core.middleware import CorrelationIdMiddleware, LoggingMiddleware
from resume_scanner.database import DATABASE_URL, init_db
from resume_scanner.routers.api_router import api_router
from resume_scanner.schemas.common import ErrorResponse
from resume_scanner.services.session_sweeper import run_session_sweeper
from resume_scanner.storage import CandidateStore, get_store

# ============================================================================
# LOGGING SETUP
# ============================================================================
setup_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# LIFESPAN MANAGEMENT
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.
    - Startup: Initialize database, start the session sweep in session mode
    - Shutdown: Stop background work
    """
    # === STARTUP ===
    logger.info(
        f"Starting {settings.app_name} v{settings.version} "
        f"({settings.environment}, storage={settings.db_backend}, auth={settings.auth_mode})"
    )

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    sweeper = None
    if settings.auth_mode == "session":
        sweeper = asyncio.create_task(run_session_sweeper(settings.session_sweep_interval_seconds))

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Gracefully shutting down...")
    if sweeper is not None:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass


# ============================================================================
# FASTAPI INSTANCE
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Resume scanning API: job postings, resume uploads and match scoring",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ============================================================================
# RATE LIMITER
# ============================================================================
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ============================================================================
# MIDDLEWARE STACK
# Add in REVERSE order (last added runs first): CORS → CorrelationId → Logging
# ============================================================================
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.request_id_header, "X-Process-Time"],
)

# ============================================================================
# EXCEPTION HANDLERS
# Every error leaves the API as {"error": "<message>"}
# ============================================================================
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first failing field as a 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = first["loc"][-1] if len(first["loc"]) > 0 else "request"
        message = f"{field}: {first['msg']}"
    else:
        message = "Invalid request"

    logger.warning(f"Validation Error: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle domain-specific application exceptions."""
    logger.warning(f"AppException: {exc.message}", extra={"code": exc.error_code})
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    """Handle standard HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail if isinstance(exc.detail, str) else "Request failed"},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Fallback handler for unhandled server errors."""
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected server error occurred."}
    )


# ============================================================================
# ROUTER INCLUSION
# ============================================================================
app.include_router(
    api_router,
    prefix=settings.api_prefix,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404)},
)


@app.get(f"{settings.api_prefix}/health", tags=["Health"])
def health_check(store: CandidateStore = Depends(get_store)):
    """Liveness and storage connectivity in one probe."""
    try:
        store.ping()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "database": "memory" if settings.db_backend == "memory" else DATABASE_URL.get_backend_name(),
    }
