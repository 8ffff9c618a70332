"""
Centralized error handling for likability batch failures.
Constants and a reusable helper so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from fastapi import HTTPException

from app.services.likability.errors import (
    BatchTimeoutError,
    LikabilityError,
    PublishError,
    RollupReadError,
    WeightConfigError,
)

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_SERVICE_UNAVAILABLE = 503  # rollup source down
STATUS_GATEWAY_TIMEOUT = 504  # batch over its time budget
STATUS_INTERNAL_ERROR = 500

MSG_ROLLUP_UNAVAILABLE = "Engagement rollup is unavailable; no scores were computed."
MSG_PUBLISH_FAILED = "Failed to publish likability scores ({stage})."
MSG_TIMEOUT = "Likability computation exceeded its time budget; no scores were published."
MSG_BAD_WEIGHTS = "Likability weight configuration is invalid: {error}"


# ---------------------------------------------------------------------------
# Error rules: (exception type, status_code, detail template)
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

# First match wins; templates may use {error} and {stage}.
LIKABILITY_ERROR_RULES: list[tuple[type[LikabilityError], int, str]] = [
    (RollupReadError, STATUS_SERVICE_UNAVAILABLE, MSG_ROLLUP_UNAVAILABLE),
    (PublishError, STATUS_INTERNAL_ERROR, MSG_PUBLISH_FAILED),
    (BatchTimeoutError, STATUS_GATEWAY_TIMEOUT, MSG_TIMEOUT),
    (WeightConfigError, STATUS_INTERNAL_ERROR, MSG_BAD_WEIGHTS),
]


def likability_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from a likability batch into an HTTPException.
    Uses LIKABILITY_ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for exc_type, status_code, template in LIKABILITY_ERROR_RULES:
        if isinstance(exc, exc_type):
            detail = template.format(error=str(exc), stage=getattr(exc, "stage", ""))
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))
