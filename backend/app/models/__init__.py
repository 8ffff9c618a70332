from app.models.engagement_rollup import GameEngagementRollup
from app.models.likability_job import LikabilityJob
from app.models.likability_score import LikabilityScore

__all__ = [
    "GameEngagementRollup",
    "LikabilityJob",
    "LikabilityScore",
]
