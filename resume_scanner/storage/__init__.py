"""
Store provider.

DB_BACKEND=memory shares one InMemoryStore for the process; every SQL
backend gets a SQLAlchemyStore bound to a fresh session per unit of work.
"""
from contextlib import contextmanager
from typing import Iterator

from resume_scanner.core.config import settings
from resume_scanner.database import SessionLocal
from resume_scanner.storage.base import CandidateStore
from resume_scanner.storage.memory import InMemoryStore
from resume_scanner.storage.sql import SQLAlchemyStore

_memory_store = InMemoryStore() if settings.db_backend == "memory" else None


@contextmanager
def open_store() -> Iterator[CandidateStore]:
    if _memory_store is not None:
        yield _memory_store
        return
    db = SessionLocal()
    try:
        yield SQLAlchemyStore(db)
    finally:
        db.close()


def get_store() -> Iterator[CandidateStore]:
    """
    Store Provider: FastAPI dependency yielding a store per request.
    """
    with open_store() as store:
        yield store


__all__ = [
    "CandidateStore",
    "InMemoryStore",
    "SQLAlchemyStore",
    "get_store",
    "open_store",
]
