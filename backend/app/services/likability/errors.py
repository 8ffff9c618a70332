"""
Likability batch errors. Every failure that ends a run raises a LikabilityError subclass;
empty input and audit-log failures are not errors.
"""


class LikabilityError(Exception):
    """Base for failures that end a likability batch run."""


class RollupReadError(LikabilityError):
    """Engagement rollup could not be read; nothing was computed."""


class PublishError(LikabilityError):
    """Score rows could not be replaced. stage is 'delete' or 'insert'."""

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"likability publish failed at {stage}: {cause}")


class BatchTimeoutError(LikabilityError):
    """Run exceeded its wall-clock budget before publishing."""

    def __init__(self, elapsed_seconds: float, budget_seconds: float, state: str):
        self.elapsed_seconds = elapsed_seconds
        self.budget_seconds = budget_seconds
        self.state = state
        super().__init__(
            f"likability batch exceeded {budget_seconds:.1f}s budget during {state} "
            f"(elapsed {elapsed_seconds:.1f}s)"
        )


class WeightConfigError(LikabilityError):
    """Weight table override is malformed or breaks the sign convention."""
