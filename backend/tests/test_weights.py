"""
Unit tests for weight tables

- Genre resolution falls back to arcade, then global
- Genre tables override global key by key
- Overrides are validated (keys, sign convention, global presence)
"""

import pytest

from app.services.likability.errors import WeightConfigError
from app.services.likability.types import Genre
from app.services.likability.weights import (
    DEFAULT_WEIGHTS,
    GLOBAL_TABLE,
    WeightTable,
    load_weight_table,
)


class TestResolution:

    def test_genre_with_own_table(self):
        table = load_weight_table()
        resolved = {k: (w, src) for k, w, src in table.resolve(Genre.RUNNER)}
        assert resolved["averageSessionSeconds"] == (0.35, "runner")
        assert resolved["restartToCompleteRatio"] == (-0.2, "runner")

    def test_other_genre_matches_global_weights(self):
        """'other' has no table; its effective weights equal the global table"""
        table = load_weight_table()
        resolved = {k: w for k, w, _ in table.resolve(Genre.OTHER)}
        assert resolved == DEFAULT_WEIGHTS[GLOBAL_TABLE]

    def test_missing_genre_falls_back_to_arcade(self):
        table = load_weight_table()
        assert table.table_name_for(Genre.PLATFORMER) == "arcade"

    def test_falls_back_to_global_without_arcade(self):
        tables = {name: w for name, w in DEFAULT_WEIGHTS.items() if name != "arcade"}
        table = WeightTable(tables)
        assert table.table_name_for(Genre.LOGIC) == GLOBAL_TABLE
        assert all(src == GLOBAL_TABLE for _, _, src in table.resolve(Genre.LOGIC))

    def test_partial_table_overrides_key_by_key(self):
        table = load_weight_table('{"shooter": {"completionRate": 0.4}}')
        resolved = {k: (w, src) for k, w, src in table.resolve(Genre.SHOOTER)}
        assert resolved["completionRate"] == (0.4, "shooter")
        assert resolved["shareRate"] == (0.2, GLOBAL_TABLE)
        assert len(resolved) == 6

    def test_iteration_follows_global_keys(self):
        table = load_weight_table()
        keys = [k for k, _, _ in table.resolve(Genre.PUZZLE)]
        assert keys == list(DEFAULT_WEIGHTS[GLOBAL_TABLE])


class TestOverrides:

    def test_override_merges_into_defaults(self):
        table = load_weight_table('{"puzzle": {"shareRate": 0.5}}')
        assert table.tables["puzzle"]["shareRate"] == 0.5
        assert table.tables["puzzle"]["favoriteRate"] == 0.3
        assert table.tables["runner"] == DEFAULT_WEIGHTS["runner"]

    def test_arcade_override_reaches_unlisted_genres(self):
        """Genres without a table (other, platformer, ...) pick up arcade overrides"""
        table = load_weight_table('{"arcade": {"shareRate": 0.4}}')
        for genre in (Genre.OTHER, Genre.PLATFORMER):
            resolved = {k: (w, src) for k, w, src in table.resolve(genre)}
            assert resolved["shareRate"] == (0.4, "arcade")
        assert table.tables[GLOBAL_TABLE]["shareRate"] == 0.2

    def test_tables_are_immutable(self):
        table = load_weight_table()
        with pytest.raises(TypeError):
            table.tables["runner"]["shareRate"] = 1.0

    @pytest.mark.parametrize("raw", [
        "not json",
        "[1, 2]",
        '{"runner": 3}',
        '{"runner": {"popularity": 0.1}}',
        '{"bogus_genre": {"shareRate": 0.1}}',
        '{"runner": {"shareRate": "high"}}',
    ])
    def test_malformed_override_rejected(self, raw):
        with pytest.raises(WeightConfigError):
            load_weight_table(raw)

    @pytest.mark.parametrize("raw", [
        '{"global": {"completionRate": -0.1}}',
        '{"runner": {"abandonmentRate": 0.2}}',
    ])
    def test_sign_convention_enforced(self, raw):
        with pytest.raises(WeightConfigError):
            load_weight_table(raw)

    def test_global_table_required(self):
        with pytest.raises(WeightConfigError):
            WeightTable({"runner": DEFAULT_WEIGHTS["runner"]})

    def test_global_table_must_be_complete(self):
        partial = dict(DEFAULT_WEIGHTS[GLOBAL_TABLE])
        partial.pop("favoriteRate")
        with pytest.raises(WeightConfigError):
            WeightTable({GLOBAL_TABLE: partial})
