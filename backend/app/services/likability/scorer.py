"""
Weighted likability score for one game: sum over the global metric keys of
normalized value x effective weight, plus one component per key for explainability.
"""
from typing import Mapping

from app.services.likability.normalize import DEFAULT_RANGE, normalise
from app.services.likability.types import GameMetrics, LikabilityComponent, MetricRange, ScoredGame
from app.services.likability.weights import WeightTable


def score_game(
    metric: GameMetrics,
    ranges: Mapping[str, MetricRange],
    weights: WeightTable,
) -> ScoredGame:
    stats = {k.value: v for k, v in metric.stats.as_dict().items()}
    components: list[LikabilityComponent] = []
    total = 0.0
    for key, weight, source in weights.resolve(metric.genre):
        value = stats.get(key, 0.0)
        r = ranges.get(key, DEFAULT_RANGE)
        normalized = normalise(value, r.min, r.max)
        total += normalized * weight
        components.append(LikabilityComponent(
            key=key,
            label=key,
            weight=weight,
            genre=source,
            observed_value=value,
            normalized_value=normalized,
        ))
    return ScoredGame(
        game_id=metric.game_id,
        genre=metric.genre,
        score=total,
        components=components,
        sample_size=metric.sessions,
    )


def score_batch(
    metrics: list[GameMetrics],
    ranges: Mapping[str, MetricRange],
    weights: WeightTable,
) -> list[ScoredGame]:
    return [score_game(m, ranges, weights) for m in metrics]
