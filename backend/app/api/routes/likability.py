"""
Likability API: run the scoring batch and read published scores.

compute runs one batch synchronously; trigger is the scheduler-facing wrapper around it
(same work, result nested under "result").
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.constants import (
    LIKABILITY_JOBS_MAX_LIMIT,
    LIKABILITY_SCORES_DEFAULT_LIMIT,
    LIKABILITY_SCORES_MAX_LIMIT,
)
from app.core.errors import likability_error_to_http
from app.db.session import get_db
from app.services.likability import (
    Genre,
    LikabilityError,
    compute_likability,
    get_ranked_scores,
    get_recent_jobs,
    get_score_for_game,
)
from app.services.likability.pipeline import STATUS_NO_DATA
from app.services.likability.ranking import score_to_dict
from app.services.likability.weights import get_weight_table

router = APIRouter()
logger = logging.getLogger(__name__)


def _run_compute(db: Session) -> dict[str, Any]:
    try:
        result = compute_likability(db)
    except LikabilityError as e:
        logger.error("POST /likability/compute failed: %s", e)
        raise likability_error_to_http(e) from e
    if result.status == STATUS_NO_DATA:
        return {"message": "No engagement data yet", "rows": 0}
    return {"success": True, "status": result.status, "rows": result.rows}


@router.post("/compute")
def compute(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Compute likability for all games with rollup data and replace their score rows."""
    return _run_compute(db)


@router.post("/trigger")
def trigger(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Scheduled-trigger entrypoint: runs compute and wraps its result."""
    result = _run_compute(db)
    return {"success": True, "message": "Likability computation triggered", "result": result}


@router.get("/scores")
def list_scores(
    db: Session = Depends(get_db),
    genre: Genre | None = Query(None),
    limit: int = Query(LIKABILITY_SCORES_DEFAULT_LIMIT, ge=1, le=LIKABILITY_SCORES_MAX_LIMIT),
) -> dict[str, Any]:
    """Scores in feed order (score desc, newest first on ties), optionally for one genre."""
    rows = get_ranked_scores(db, genre=genre, limit=limit)
    return {"scores": [score_to_dict(r) for r in rows], "count": len(rows)}


@router.get("/scores/{game_id}")
def get_score(game_id: str, db: Session = Depends(get_db)) -> dict[str, Any]:
    """One game's score with its component breakdown."""
    row = get_score_for_game(db, game_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No likability score for game {game_id}")
    return score_to_dict(row, include_components=True)


@router.get("/jobs")
def list_jobs(
    db: Session = Depends(get_db),
    limit: int = Query(20, ge=1, le=LIKABILITY_JOBS_MAX_LIMIT),
) -> dict[str, Any]:
    rows = get_recent_jobs(db, limit=limit)
    return {
        "jobs": [
            {
                "id": r.id,
                "status": r.status,
                "details": r.details or {},
                "created_at": r.created_at.isoformat() if r.created_at else None,
            }
            for r in rows
        ]
    }


@router.get("/weights")
def weights() -> dict[str, Any]:
    """
    Effective weight tables (defaults merged with LIKABILITY_WEIGHTS_JSON).

    Genres without their own table (platformer, shooter, logic, other) are scored with the
    "arcade" table, so an arcade override also changes their weights; their components report
    genre="arcade". Keys missing from a genre table come from "global".
    """
    try:
        table = get_weight_table()
    except LikabilityError as e:
        logger.error("GET /likability/weights failed: %s", e)
        raise likability_error_to_http(e) from e
    return {"weights": table.to_dict()}
