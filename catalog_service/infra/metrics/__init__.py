"""Prometheus metrics on a dedicated registry, exported at GET /metrics."""

from __future__ import annotations

from catalog_service.infra.metrics import business, tracking
from catalog_service.infra.metrics.prometheus import REGISTRY

__all__ = ["REGISTRY", "business", "tracking"]
