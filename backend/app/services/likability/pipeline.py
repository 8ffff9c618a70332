"""
Likability batch: load the rollup snapshot, extract ratios, normalize against the batch's
global ranges, apply genre weights, replace the score rows.

State: idle -> loading -> (no data: idle) -> computing -> publishing -> idle | failed.
A failed run is not retried here; the next scheduled trigger starts from loading again.
Given the same snapshot a re-run produces the same scores (only computed_at changes).
"""
import logging
import time
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from app.config import settings
from app.services.likability.errors import BatchTimeoutError, LikabilityError, PublishError
from app.services.likability.metrics import extract_all
from app.services.likability.normalize import compute_ranges
from app.services.likability.publisher import (
    JOB_STATUS_COMPLETED,
    JOB_STATUS_FAILED,
    publish_scores,
    record_job,
)
from app.services.likability.rollup import load_rollup_rows
from app.services.likability.scorer import score_batch
from app.services.likability.types import BatchResult, BatchState
from app.services.likability.weights import WeightTable, get_weight_table

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_NO_DATA = "no_data"


class LikabilityBatch:
    """One invocation of the likability pipeline against a DB session."""

    def __init__(
        self,
        db: Session,
        weights: WeightTable | None = None,
        time_budget_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.db = db
        self.weights = weights  # resolved in run() so a bad override is recorded as a failed run
        if time_budget_seconds is None:
            time_budget_seconds = settings.likability_time_budget_seconds
        self.time_budget_seconds = time_budget_seconds
        self._clock = clock
        self._started: float | None = None
        self.state = BatchState.IDLE
        self.history: list[BatchState] = [BatchState.IDLE]

    def _transition(self, state: BatchState) -> None:
        logger.debug("likability batch: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _check_budget(self) -> None:
        if not self.time_budget_seconds or self.time_budget_seconds <= 0:
            return
        elapsed = self._clock() - self._started
        if elapsed > self.time_budget_seconds:
            raise BatchTimeoutError(elapsed, self.time_budget_seconds, self.state.value)

    def run(self) -> BatchResult:
        self._started = self._clock()
        self._transition(BatchState.LOADING)
        try:
            if self.weights is None:
                self.weights = get_weight_table()
            rows = load_rollup_rows(self.db)
            if not rows:
                logger.info("likability batch: no engagement data yet, nothing to score")
                self._transition(BatchState.IDLE)
                return BatchResult(status=STATUS_NO_DATA)
            self._check_budget()

            self._transition(BatchState.COMPUTING)
            metrics = extract_all(rows)
            ranges = compute_ranges(metrics)
            scored = score_batch(metrics, ranges, self.weights)
            self._check_budget()

            self._transition(BatchState.PUBLISHING)
            computed_at = datetime.now(timezone.utc)
            for s in scored:
                s.computed_at = computed_at
            written = publish_scores(self.db, scored, computed_at)
        except LikabilityError as e:
            failed_in = self.state.value
            self._transition(BatchState.FAILED)
            details = {"error": str(e), "state": failed_in}
            if isinstance(e, PublishError):
                details["stage"] = e.stage
            record_job(self.db, JOB_STATUS_FAILED, details)
            raise

        record_job(self.db, JOB_STATUS_COMPLETED, {"rows": written})
        self._transition(BatchState.IDLE)
        logger.info(
            "likability batch: scored %s games in %.2fs",
            written,
            self._clock() - self._started,
        )
        return BatchResult(status=STATUS_COMPLETED, rows=written, computed_at=computed_at, scores=scored)


def compute_likability(db: Session, **kwargs) -> BatchResult:
    """Compute likability for all games with rollup data. Raises LikabilityError on failure."""
    return LikabilityBatch(db, **kwargs).run()
