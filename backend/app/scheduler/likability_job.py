"""Runs every LIKABILITY_INTERVAL_MINUTES: recompute likability scores for all games with rollup data."""
import logging

from app.db.session import SessionLocal
from app.services.likability import LikabilityError, compute_likability

logger = logging.getLogger(__name__)


def run_likability_job() -> None:
    db = SessionLocal()
    try:
        result = compute_likability(db)
        logger.info("Likability job: %s (%s rows)", result.status, result.rows)
    except LikabilityError as e:
        logger.error("Likability job failed: %s", e)
    except Exception as e:
        logger.exception("Likability job crashed: %s", e)
        db.rollback()
    finally:
        db.close()
