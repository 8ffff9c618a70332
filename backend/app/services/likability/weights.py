"""
Genre weight tables for the likability score.

The "global" table is always present and defines the metric keys that get scored; genre
tables may be partial and override global weights key by key. A genre without its own table
uses "arcade", then "global".

Defaults can be overridden with LIKABILITY_WEIGHTS_JSON ({genre: {metricKey: weight}}), merged
key by key over the defaults below.
"""
import json
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from app.config import settings
from app.services.likability.errors import WeightConfigError
from app.services.likability.types import Genre, MetricKey, NEGATIVE_METRICS, POSITIVE_METRICS

logger = logging.getLogger(__name__)

GLOBAL_TABLE = "global"
FALLBACK_TABLE = "arcade"

DEFAULT_WEIGHTS: dict[str, dict[str, float]] = {
    GLOBAL_TABLE: {
        "completionRate": 0.25,
        "averageSessionSeconds": 0.25,
        "restartToCompleteRatio": -0.15,
        "shareRate": 0.2,
        "favoriteRate": 0.2,
        "abandonmentRate": -0.15,
    },
    "runner": {
        "completionRate": 0.15,
        "averageSessionSeconds": 0.35,
        "restartToCompleteRatio": -0.2,
        "shareRate": 0.3,
        "favoriteRate": 0.2,
        "abandonmentRate": -0.2,
    },
    "tower_defense": {
        "completionRate": 0.35,
        "averageSessionSeconds": 0.2,
        "restartToCompleteRatio": -0.1,
        "shareRate": 0.15,
        "favoriteRate": 0.3,
        "abandonmentRate": -0.1,
    },
    "puzzle": {
        "completionRate": 0.3,
        "averageSessionSeconds": 0.2,
        "restartToCompleteRatio": -0.1,
        "shareRate": 0.2,
        "favoriteRate": 0.3,
        "abandonmentRate": -0.1,
    },
    "arcade": {
        "completionRate": 0.25,
        "averageSessionSeconds": 0.25,
        "restartToCompleteRatio": -0.15,
        "shareRate": 0.2,
        "favoriteRate": 0.2,
        "abandonmentRate": -0.15,
    },
}

_TABLE_NAMES = {GLOBAL_TABLE} | {g.value for g in Genre}
_METRIC_NAMES = {m.value for m in MetricKey}


def _check_weight(table: str, key: str, weight: float) -> None:
    if key not in _METRIC_NAMES:
        raise WeightConfigError(f"unknown metric key {key!r} in weight table {table!r}")
    metric = MetricKey(key)
    if metric in POSITIVE_METRICS and weight < 0:
        raise WeightConfigError(f"{table}.{key} must be >= 0 (got {weight})")
    if metric in NEGATIVE_METRICS and weight > 0:
        raise WeightConfigError(f"{table}.{key} must be <= 0 (got {weight})")


class WeightTable:
    """Immutable genre -> {metricKey -> weight} mapping with a guaranteed global entry."""

    def __init__(self, tables: Mapping[str, Mapping[str, float]]):
        if GLOBAL_TABLE not in tables:
            raise WeightConfigError("weight tables must include a 'global' table")
        missing = _METRIC_NAMES - set(tables[GLOBAL_TABLE])
        if missing:
            raise WeightConfigError(f"global weight table is missing {sorted(missing)}")
        frozen = {}
        for name, weights in tables.items():
            if name not in _TABLE_NAMES:
                raise WeightConfigError(f"unknown weight table {name!r}")
            clean = {}
            for key, weight in weights.items():
                if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                    raise WeightConfigError(f"{name}.{key} must be a number (got {weight!r})")
                weight = float(weight)
                _check_weight(name, key, weight)
                clean[key] = weight
            frozen[name] = MappingProxyType(clean)
        self._tables = MappingProxyType(frozen)

    @property
    def tables(self) -> Mapping[str, Mapping[str, float]]:
        return self._tables

    @property
    def global_weights(self) -> Mapping[str, float]:
        return self._tables[GLOBAL_TABLE]

    def metric_keys(self) -> list[str]:
        """Keys scored for every game, in global-table order."""
        return list(self.global_weights)

    def table_name_for(self, genre: Genre) -> str:
        if genre.value in self._tables:
            return genre.value
        if FALLBACK_TABLE in self._tables:
            return FALLBACK_TABLE
        return GLOBAL_TABLE

    def resolve(self, genre: Genre) -> list[tuple[str, float, str]]:
        """
        Effective (metric_key, weight, source_table) per global key for a genre.
        source_table is the genre-level table when it defines the key, else "global".
        """
        name = self.table_name_for(genre)
        genre_weights = self._tables[name]
        resolved = []
        for key, global_weight in self.global_weights.items():
            if key in genre_weights:
                resolved.append((key, genre_weights[key], name))
            else:
                resolved.append((key, global_weight, GLOBAL_TABLE))
        return resolved

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {name: dict(weights) for name, weights in self._tables.items()}


def load_weight_table(raw_json: str = "") -> WeightTable:
    """Defaults merged key by key with an optional JSON override."""
    merged = {name: dict(weights) for name, weights in DEFAULT_WEIGHTS.items()}
    if raw_json:
        try:
            override = json.loads(raw_json)
        except json.JSONDecodeError as e:
            raise WeightConfigError(f"LIKABILITY_WEIGHTS_JSON is not valid JSON: {e}") from e
        if not isinstance(override, dict):
            raise WeightConfigError("LIKABILITY_WEIGHTS_JSON must be an object of genre -> weights")
        for name, weights in override.items():
            if not isinstance(weights, dict):
                raise WeightConfigError(f"weights for {name!r} must be an object")
            merged.setdefault(name, {}).update(weights)
        logger.info("Likability weights: applied overrides for %s", sorted(override))
    return WeightTable(merged)


@lru_cache(maxsize=1)
def get_weight_table() -> WeightTable:
    return load_weight_table(settings.likability_weights_json)
