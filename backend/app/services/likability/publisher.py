"""
Replace likability_scores for a batch and record the run in likability_jobs.

Delete-by-game_id and insert share one transaction, so readers never see the batch's games
without a score: a failed insert rolls the delete back. The job record is written afterwards
and is best-effort.
"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.likability_job import LikabilityJob
from app.models.likability_score import LikabilityScore
from app.services.likability.errors import PublishError
from app.services.likability.types import ScoredGame

logger = logging.getLogger(__name__)

JOB_STATUS_COMPLETED = "completed"
JOB_STATUS_FAILED = "failed"


def publish_scores(db: Session, scores: list[ScoredGame], computed_at: datetime) -> int:
    """
    Delete existing rows for the batch's game_ids, insert the new rows, commit.
    Raises PublishError(stage="delete") before any insert if the delete fails,
    PublishError(stage="insert") if the insert or commit fails. Returns rows inserted.
    """
    if not scores:
        return 0
    game_ids = [s.game_id for s in scores]
    try:
        deleted = (
            db.query(LikabilityScore)
            .filter(LikabilityScore.game_id.in_(game_ids))
            .delete(synchronize_session=False)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("publish_scores: delete failed for %s games: %s", len(game_ids), e)
        raise PublishError("delete", e) from e

    try:
        db.add_all([
            LikabilityScore(
                game_id=s.game_id,
                genre=s.genre.value,
                score=s.score,
                components=s.components_json(),
                sample_size=s.sample_size,
                computed_at=computed_at,
            )
            for s in scores
        ])
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("publish_scores: insert failed for %s games: %s", len(scores), e)
        raise PublishError("insert", e) from e

    logger.info("publish_scores: replaced %s old rows with %s new rows", deleted, len(scores))
    return len(scores)


def record_job(db: Session, status: str, details: dict[str, Any]) -> bool:
    """Write a likability_jobs row. Failures are logged and swallowed; returns False on failure."""
    try:
        db.add(LikabilityJob(status=status, details=details))
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Failed to log likability job (%s): %s", status, e)
        return False
