import asyncio
import logging
from datetime import datetime
from typing import Optional

from resume_scanner.database import utcnow
from resume_scanner.storage import open_store
from resume_scanner.storage.base import CandidateStore

logger = logging.getLogger(__name__)


def sweep_expired_sessions(store: CandidateStore, now: Optional[datetime] = None) -> int:
    removed = store.delete_expired_sessions(now or utcnow())
    if removed:
        logger.info(f"Session sweep removed {removed} expired session(s)")
    return removed


def _sweep_once() -> int:
    with open_store() as store:
        return sweep_expired_sessions(store)


async def run_session_sweeper(interval_seconds: float):
    """
    Periodic sweep; runs until cancelled by the application lifespan.
    """
    logger.info(f"Session sweeper started (interval={interval_seconds}s)")
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await asyncio.to_thread(_sweep_once)
        except Exception as e:
            logger.error(f"Session sweep failed: {e}", exc_info=True)
