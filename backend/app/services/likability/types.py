"""
In-memory types for the likability batch: parsed rollup rows, metric vectors, ranges,
components and per-game results. Only rollup.py and publisher.py touch ORM rows.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Genre(str, Enum):
    RUNNER = "runner"
    TOWER_DEFENSE = "tower_defense"
    PUZZLE = "puzzle"
    PLATFORMER = "platformer"
    SHOOTER = "shooter"
    ARCADE = "arcade"
    LOGIC = "logic"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str | None) -> "Genre":
        """Unknown or missing genre tags map to OTHER."""
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.OTHER


class MetricKey(str, Enum):
    COMPLETION_RATE = "completionRate"
    AVERAGE_SESSION_SECONDS = "averageSessionSeconds"
    RESTART_TO_COMPLETE_RATIO = "restartToCompleteRatio"
    SHARE_RATE = "shareRate"
    FAVORITE_RATE = "favoriteRate"
    ABANDONMENT_RATE = "abandonmentRate"


# Contributors whose weight must be >= 0; the rest must be <= 0.
POSITIVE_METRICS = frozenset({
    MetricKey.COMPLETION_RATE,
    MetricKey.AVERAGE_SESSION_SECONDS,
    MetricKey.SHARE_RATE,
    MetricKey.FAVORITE_RATE,
})
NEGATIVE_METRICS = frozenset({
    MetricKey.RESTART_TO_COMPLETE_RATIO,
    MetricKey.ABANDONMENT_RATE,
})


class BatchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    COMPUTING = "computing"
    PUBLISHING = "publishing"
    FAILED = "failed"


@dataclass(frozen=True)
class EngagementRollupRow:
    """One game's counters for the batch. Nullable counters are already 0 here."""
    game_id: str
    genre: Genre
    sessions: int = 0
    completions: int = 0
    total_seconds: float = 0.0
    restarts: int = 0
    shares: int = 0
    abandons: int = 0
    favorites: int = 0


@dataclass(frozen=True)
class MetricVector:
    completion_rate: float
    average_session_seconds: float
    restart_to_complete_ratio: float
    share_rate: float
    favorite_rate: float
    abandonment_rate: float

    def as_dict(self) -> dict[MetricKey, float]:
        return {
            MetricKey.COMPLETION_RATE: self.completion_rate,
            MetricKey.AVERAGE_SESSION_SECONDS: self.average_session_seconds,
            MetricKey.RESTART_TO_COMPLETE_RATIO: self.restart_to_complete_ratio,
            MetricKey.SHARE_RATE: self.share_rate,
            MetricKey.FAVORITE_RATE: self.favorite_rate,
            MetricKey.ABANDONMENT_RATE: self.abandonment_rate,
        }


@dataclass(frozen=True)
class MetricRange:
    min: float
    max: float


@dataclass(frozen=True)
class LikabilityComponent:
    key: str
    label: str
    weight: float
    genre: str  # weight table that supplied `weight`: the game's genre, "arcade" or "global"
    observed_value: float
    normalized_value: float

    def to_json(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "weight": self.weight,
            "genre": self.genre,
            "observedValue": self.observed_value,
            "normalizedValue": self.normalized_value,
        }


@dataclass(frozen=True)
class GameMetrics:
    game_id: str
    genre: Genre
    sessions: int
    stats: MetricVector


@dataclass
class ScoredGame:
    game_id: str
    genre: Genre
    score: float
    components: list[LikabilityComponent]
    sample_size: int
    computed_at: datetime | None = None

    def components_json(self) -> list[dict[str, Any]]:
        return [c.to_json() for c in self.components]


@dataclass
class BatchResult:
    status: str  # completed | no_data
    rows: int = 0
    computed_at: datetime | None = None
    scores: list[ScoredGame] = field(default_factory=list)
