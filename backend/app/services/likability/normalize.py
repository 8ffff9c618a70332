"""
Batch-wide min/max per metric and linear rescaling to [0, 1].

Ranges are computed over every game in the batch regardless of genre and always include 0,
so an all-zero metric still has a defined (empty) range and negative inputs scale relative
to zero.
"""
from collections import defaultdict
from typing import Iterable

from app.services.likability.types import GameMetrics, MetricRange

# Used when a metric key has no observed range in the batch.
DEFAULT_RANGE = MetricRange(min=0.0, max=1.0)


def normalise(value: float, lo: float, hi: float) -> float:
    """(value - lo) / (hi - lo); 0 when the range is empty. Not clamped."""
    if hi == lo:
        return 0.0
    return (value - lo) / (hi - lo)


def compute_ranges(metrics: Iterable[GameMetrics]) -> dict[str, MetricRange]:
    values: dict[str, list[float]] = defaultdict(list)
    for item in metrics:
        for key, value in item.stats.as_dict().items():
            values[key.value].append(value)
    return {
        key: MetricRange(min=min(min(vals), 0.0), max=max(max(vals), 0.0))
        for key, vals in values.items()
    }
