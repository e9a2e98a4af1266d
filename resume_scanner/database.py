from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from resume_scanner.core.config import Config, settings

_DRIVERS = {
    "postgresql": ("postgresql+psycopg2", 5432),
    "mysql": ("mysql+pymysql", 3306),
}


def utcnow() -> datetime:
    """Naive UTC timestamp; every backend stores timestamps without a zone."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def build_database_url(config: Config) -> URL:
    """
    Resolve the SQLAlchemy URL for the configured backend.
    DATABASE_URL wins; otherwise the URL is assembled from the DB_* variables.
    """
    if config.database_url:
        return make_url(config.database_url)

    if config.db_backend == "memory":
        return make_url("sqlite://")

    if config.db_backend == "sqlite":
        return make_url(f"sqlite:///./{config.db_name}.db")

    if config.db_backend not in _DRIVERS:
        raise ValueError(f"Unsupported DB_BACKEND '{config.db_backend}'")

    drivername, default_port = _DRIVERS[config.db_backend]
    return URL.create(
        drivername,
        username=config.db_user,
        password=config.db_password,
        host=config.db_host,
        port=config.db_port or default_port,
        database=config.db_name,
    )


def build_engine(url: URL):
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    # SQLite configuration for local development/testing
    if url.database in (None, "", ":memory:"):
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    return create_engine(url, connect_args={"check_same_thread": False})


DATABASE_URL = build_database_url(settings)
engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    """
    Registers all domain models and initializes the database schema.
    This should be called during the application startup lifespan.
    """
    if settings.db_backend == "memory":
        return
    # Import all models to ensure they are registered with Base.metadata before create_all
    from resume_scanner.models import user, job, resume  # noqa: F401
    Base.metadata.create_all(bind=engine)
