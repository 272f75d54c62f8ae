"""Application counters: errors, retries and catalog activity."""

from __future__ import annotations

from prometheus_client import Counter

from catalog_service.infra.metrics.prometheus import REGISTRY

# Errors leaving the service as problem documents
errors_total = Counter(
    "errors_total",
    "Problem responses by type, endpoint and status code",
    ["error_type", "endpoint", "status_code"],
    registry=REGISTRY,
)
exceptions_unhandled_total = Counter(
    "exceptions_unhandled_total",
    "Exceptions that reached the catch-all handler",
    ["exception_type", "endpoint"],
    registry=REGISTRY,
)
validation_errors_total = Counter(
    "validation_errors_total",
    "Rejected fields, one increment per field per request",
    ["endpoint", "field"],
    registry=REGISTRY,
)

# utils.retry
retry_attempts_total = Counter(
    "retry_attempts_total",
    "Attempts made after a retryable failure",
    ["operation", "attempt_number"],
    registry=REGISTRY,
)
retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Calls that failed on every attempt",
    ["operation"],
    registry=REGISTRY,
)
retry_success_after_failure_total = Counter(
    "retry_success_after_failure_total",
    "Calls that succeeded after at least one failed attempt",
    ["operation", "attempts_needed"],
    registry=REGISTRY,
)

# Catalog
catalog_tags_created_total = Counter(
    "catalog_tags_created_total",
    "Tag rows inserted by reconciliation",
    registry=REGISTRY,
)
catalog_tag_conflicts_total = Counter(
    "catalog_tag_conflicts_total",
    "Unique-label conflicts during reconciliation (outcome: retried, exhausted)",
    ["outcome"],
    registry=REGISTRY,
)
catalog_resource_operations_total = Counter(
    "catalog_resource_operations_total",
    "Resource commands by operation and result (success, not_found, conflict)",
    ["operation", "result"],
    registry=REGISTRY,
)
