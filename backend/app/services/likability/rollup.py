"""
Read the engagement rollup snapshot. This is the only place rollup rows are parsed:
NULL counters become 0 and genre tags become Genre values here, not in the scoring math.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.engagement_rollup import GameEngagementRollup
from app.services.likability.errors import RollupReadError
from app.services.likability.types import EngagementRollupRow, Genre

logger = logging.getLogger(__name__)


def to_rollup_row(r: GameEngagementRollup) -> EngagementRollupRow:
    genre = Genre.parse(r.genre)
    if genre is Genre.OTHER and (r.genre or "").strip().lower() != Genre.OTHER.value:
        logger.debug("rollup: game %s has unknown genre %r, scoring as other", r.game_id, r.genre)
    return EngagementRollupRow(
        game_id=r.game_id,
        genre=genre,
        sessions=r.sessions or 0,
        completions=r.completions or 0,
        total_seconds=float(r.total_seconds or 0.0),
        restarts=r.restarts or 0,
        shares=r.shares or 0,
        abandons=r.abandons or 0,
        favorites=r.favorites or 0,
    )


def load_rollup_rows(db: Session) -> list[EngagementRollupRow]:
    """Snapshot of every rollup row. Raises RollupReadError if the query fails."""
    try:
        rows = db.query(GameEngagementRollup).order_by(GameEngagementRollup.game_id.asc()).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise RollupReadError(f"failed to load engagement rollup: {e}") from e
    return [to_rollup_row(r) for r in rows]
