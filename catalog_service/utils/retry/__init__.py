"""Retry helpers shared by database startup and tag reconciliation."""

from __future__ import annotations

from catalog_service.utils.retry.decorator import retry
from catalog_service.utils.retry.exceptions import RetryError, RetryStatistics
from catalog_service.utils.retry.strategies import Backoff

__all__ = ["Backoff", "RetryError", "RetryStatistics", "retry"]
