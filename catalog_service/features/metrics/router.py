"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    HTTP: http_requests_total, http_request_duration_seconds
    Database: database_query_duration_seconds
    Catalog: catalog_resource_operations_total, catalog_tags_created_total,
        catalog_tag_conflicts_total
    Errors: errors_total, validation_errors_total, exceptions_unhandled_total
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from catalog_service.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose every metric registered on the service registry."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
