"""``X-Request-ID`` propagation."""

from __future__ import annotations

from catalog_service.app.middleware.base import HeaderContextMiddleware, generate_uuid


class RequestIDMiddleware(HeaderContextMiddleware):
    """Reuse the caller's request id or mint a UUID4.

    The id ends up in ``request.state.request_id``, in every log record
    written while handling the request, and in problem documents.
    """

    header_name = "x-request-id"
    context_key = "request_id"
    clear_context_on_finish = True

    def generate_value(self) -> str:
        return generate_uuid()
