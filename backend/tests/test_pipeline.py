"""
Integration tests for the likability batch against SQLite

- End-to-end scoring and replace semantics
- Idempotence across runs
- State transitions and failure handling (weights, read, timeout, publish, audit log)
"""

import pytest

from app.models import LikabilityJob, LikabilityScore
from app.services.likability import (
    BatchTimeoutError,
    LikabilityBatch,
    PublishError,
    RollupReadError,
    WeightConfigError,
    compute_likability,
)
from app.services.likability.types import BatchState


class _SteppingClock:
    """Monotonic clock that advances `step` seconds per call"""

    def __init__(self, step):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def _scores(db):
    return {r.game_id: r for r in db.query(LikabilityScore).all()}


class TestComputeLikability:

    def test_no_data_is_noop(self, db):
        batch = LikabilityBatch(db, time_budget_seconds=0)
        result = batch.run()
        assert (result.status, result.rows) == ("no_data", 0)
        assert batch.history == [BatchState.IDLE, BatchState.LOADING, BatchState.IDLE]
        assert db.query(LikabilityJob).count() == 0

    def test_runner_pair_end_to_end(self, db, add_rollup, runner_pair):
        game_a, game_b = runner_pair
        add_rollup("A", "runner", **game_a)
        add_rollup("B", "runner", **game_b)

        batch = LikabilityBatch(db, time_budget_seconds=0)
        result = batch.run()

        assert (result.status, result.rows) == ("completed", 2)
        assert batch.history == [
            BatchState.IDLE,
            BatchState.LOADING,
            BatchState.COMPUTING,
            BatchState.PUBLISHING,
            BatchState.IDLE,
        ]
        scores = _scores(db)
        assert scores["A"].score == pytest.approx(-79 / 600, abs=1e-6)
        assert scores["B"].score == pytest.approx(83 / 90, abs=1e-6)
        assert scores["B"].sample_size == 50
        assert len(scores["B"].components) == 6
        assert scores["B"].components[0]["normalizedValue"] == 1.0

        job = db.query(LikabilityJob).one()
        assert (job.status, job.details) == ("completed", {"rows": 2})

    def test_null_favorites_and_unknown_genre(self, db, add_rollup):
        add_rollup("g1", "racing", sessions=10, completions=5, favorites=None)
        compute_likability(db, time_budget_seconds=0)
        row = _scores(db)["g1"]
        assert row.genre == "other"
        favorite = next(c for c in row.components if c["key"] == "favoriteRate")
        assert favorite["observedValue"] == 0.0

    def test_rerun_is_idempotent_and_replaces(self, db, add_rollup, runner_pair):
        game_a, game_b = runner_pair
        add_rollup("A", "runner", **game_a)
        add_rollup("B", "puzzle", **game_b)

        compute_likability(db, time_budget_seconds=0)
        first = {gid: (r.score, r.components) for gid, r in _scores(db).items()}
        compute_likability(db, time_budget_seconds=0)
        db.expire_all()
        second = {gid: (r.score, r.components) for gid, r in _scores(db).items()}

        assert first == second
        assert db.query(LikabilityScore).count() == 2
        assert db.query(LikabilityJob).filter(LikabilityJob.status == "completed").count() == 2


class TestFailures:

    def test_rollup_read_failure(self, db, engine):
        from app.models import GameEngagementRollup

        GameEngagementRollup.__table__.drop(engine)
        batch = LikabilityBatch(db, time_budget_seconds=0)
        with pytest.raises(RollupReadError):
            batch.run()
        assert batch.state == BatchState.FAILED
        job = db.query(LikabilityJob).one()
        assert job.status == "failed"
        assert job.details["state"] == "loading"

    def test_time_budget_exceeded_publishes_nothing(self, db, add_rollup):
        add_rollup("g1", "arcade", sessions=3, completions=1)
        batch = LikabilityBatch(db, time_budget_seconds=1.0, clock=_SteppingClock(5.0))
        with pytest.raises(BatchTimeoutError):
            batch.run()
        assert batch.state == BatchState.FAILED
        assert db.query(LikabilityScore).count() == 0
        assert db.query(LikabilityJob).one().status == "failed"

    def test_zero_budget_disables_timeout(self, db, add_rollup):
        add_rollup("g1", "arcade", sessions=3, completions=1)
        result = compute_likability(db, time_budget_seconds=0, clock=_SteppingClock(1000.0))
        assert result.status == "completed"

    def test_publish_failure_surfaces(self, db, add_rollup, monkeypatch):
        add_rollup("g1", "arcade", sessions=3, completions=1)

        def fail_publish(*args, **kwargs):
            raise PublishError("insert", Exception("storage rejected"))

        monkeypatch.setattr("app.services.likability.pipeline.publish_scores", fail_publish)
        batch = LikabilityBatch(db, time_budget_seconds=0)
        with pytest.raises(PublishError):
            batch.run()
        job = db.query(LikabilityJob).one()
        assert job.details["stage"] == "insert"
        assert job.details["state"] == "publishing"

    def test_job_log_failure_does_not_fail_batch(self, db, engine, add_rollup):
        add_rollup("g1", "arcade", sessions=3, completions=1)
        LikabilityJob.__table__.drop(engine)
        result = compute_likability(db, time_budget_seconds=0)
        assert (result.status, result.rows) == ("completed", 1)
        assert db.query(LikabilityScore).count() == 1

    def test_bad_weight_override_recorded_as_failed_run(self, db, add_rollup, bad_weight_override):
        add_rollup("g1", "runner", sessions=3, completions=1)
        batch = LikabilityBatch(db, time_budget_seconds=0)
        with pytest.raises(WeightConfigError):
            batch.run()
        assert batch.state == BatchState.FAILED
        assert db.query(LikabilityScore).count() == 0
        job = db.query(LikabilityJob).one()
        assert (job.status, job.details["state"]) == ("failed", "loading")
        assert "abandonmentRate" in job.details["error"]
