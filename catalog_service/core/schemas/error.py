"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def default_title(status_code: int) -> str:
    """Return the default problem title for an HTTP status code."""
    return _DEFAULT_TITLES.get(status_code, "Error")


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
            return JSONResponse(
            status_code=404,
            content=ProblemDetail(
                type="resource-not-found",
                title="Not Found",
                status=404,
                detail="Resource not found with id=...",
                instance="/api/v1/resources/abc123"
            ).model_dump(exclude_none=True)
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "Resource not found with id='3f0c...'",
                "instance": "/api/v1/resources/3f0c...",
            }
        },
    )


class ValidationProblemDetail(ProblemDetail):
    """Problem details carrying per-field validation messages."""

    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Field name mapped to the messages of every rule it violated",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "validation-error",
                "title": "Validation Error",
                "status": 400,
                "detail": "Validation failed for 1 field(s)",
                "instance": "/api/v1/resources",
                "errors": {"tags": ["Duplicate tag labels are not allowed."]},
            }
        },
    )


__all__ = ["ProblemDetail", "ValidationProblemDetail", "default_title"]
