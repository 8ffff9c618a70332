"""
Likability scoring: rollup counters -> normalized, genre-weighted score per game.
- compute_likability runs one batch and replaces likability_scores.
- get_ranked_scores reads the published scores in feed order.
"""
from app.services.likability.errors import (
    BatchTimeoutError,
    LikabilityError,
    PublishError,
    RollupReadError,
    WeightConfigError,
)
from app.services.likability.pipeline import LikabilityBatch, compute_likability
from app.services.likability.ranking import get_ranked_scores, get_recent_jobs, get_score_for_game
from app.services.likability.types import BatchResult, Genre

__all__ = [
    "BatchResult",
    "BatchTimeoutError",
    "Genre",
    "LikabilityBatch",
    "LikabilityError",
    "PublishError",
    "RollupReadError",
    "WeightConfigError",
    "compute_likability",
    "get_ranked_scores",
    "get_recent_jobs",
    "get_score_for_game",
]
