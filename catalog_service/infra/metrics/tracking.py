"""Functions the application calls to record metrics.

Callers never touch the counters directly, so label names and value
formats stay in one place.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from catalog_service.infra.metrics import business

logger = logging.getLogger(__name__)

type ResourceOperation = Literal["create", "update", "delete"]
type ResourceResult = Literal["success", "not_found", "conflict"]
type ConflictOutcome = Literal["retried", "exhausted"]


def track_error(
    error_type: str,
    endpoint: str,
    status_code: int,
    extra: dict[str, Any] | None = None,
) -> None:
    """Count a problem response.

    Example:
        track_error("tag-label-conflict", "/api/v1/resources", 409)
    """
    business.errors_total.labels(
        error_type=error_type, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    logger.debug(
        "Tracked error %s",
        error_type,
        extra={"endpoint": endpoint, "status_code": status_code, **(extra or {})},
    )


def track_validation_error(endpoint: str, field: str) -> None:
    business.validation_errors_total.labels(endpoint=endpoint, field=field).inc()


def track_unhandled_exception(exception_type: str, endpoint: str) -> None:
    business.exceptions_unhandled_total.labels(
        exception_type=exception_type, endpoint=endpoint
    ).inc()


def track_retry_attempt(operation: str, attempt_number: int) -> None:
    """Count attempt ``attempt_number`` (2 for the first retry) of ``operation``."""
    business.retry_attempts_total.labels(
        operation=operation, attempt_number=str(attempt_number)
    ).inc()


def track_retry_exhausted(operation: str) -> None:
    business.retry_exhausted_total.labels(operation=operation).inc()


def track_retry_success(operation: str, attempts_needed: int) -> None:
    business.retry_success_after_failure_total.labels(
        operation=operation, attempts_needed=str(attempts_needed)
    ).inc()


def track_tags_created(count: int) -> None:
    if count > 0:
        business.catalog_tags_created_total.inc(count)


def track_tag_conflict(outcome: ConflictOutcome) -> None:
    business.catalog_tag_conflicts_total.labels(outcome=outcome).inc()


def track_resource_operation(operation: ResourceOperation, result: ResourceResult) -> None:
    business.catalog_resource_operations_total.labels(operation=operation, result=result).inc()
