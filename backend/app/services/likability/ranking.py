"""
Read side of likability_scores for the feed and admin views: highest score first, newest
computed_at first on ties.
"""
from typing import Any

from sqlalchemy.orm import Session

from app.models.likability_job import LikabilityJob
from app.models.likability_score import LikabilityScore
from app.services.likability.types import Genre


def get_ranked_scores(db: Session, genre: Genre | None = None, limit: int = 100) -> list[LikabilityScore]:
    q = db.query(LikabilityScore)
    if genre is not None:
        q = q.filter(LikabilityScore.genre == genre.value)
    return (
        q.order_by(LikabilityScore.score.desc(), LikabilityScore.computed_at.desc())
        .limit(limit)
        .all()
    )


def get_score_for_game(db: Session, game_id: str) -> LikabilityScore | None:
    return (
        db.query(LikabilityScore)
        .filter(LikabilityScore.game_id == game_id)
        .order_by(LikabilityScore.computed_at.desc())
        .first()
    )


def get_recent_jobs(db: Session, limit: int = 20) -> list[LikabilityJob]:
    return (
        db.query(LikabilityJob)
        .order_by(LikabilityJob.created_at.desc(), LikabilityJob.id.desc())
        .limit(limit)
        .all()
    )


def score_to_dict(row: LikabilityScore, include_components: bool = False) -> dict[str, Any]:
    out = {
        "game_id": row.game_id,
        "genre": row.genre,
        "score": row.score,
        "sample_size": row.sample_size,
        "computed_at": row.computed_at.isoformat() if row.computed_at else None,
    }
    if include_components:
        out["components"] = row.components or []
    return out
