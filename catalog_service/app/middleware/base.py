"""Pure ASGI middleware that carries one request header through logging.

The value is read from the request (or generated), stored in
``scope["state"]`` and the log context, and echoed on the response.
Streaming bodies pass through untouched.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, ClassVar

from starlette.datastructures import Headers, MutableHeaders

from catalog_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


def generate_uuid() -> str:
    return str(uuid.uuid4())


class HeaderContextMiddleware:
    """Set ``header_name`` and ``context_key`` on subclasses.

    ``generate_value`` returning None leaves a missing header unset.
    """

    header_name: ClassVar[str]
    context_key: ClassVar[str]
    clear_context_on_finish: ClassVar[bool] = False

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    def generate_value(self) -> str | None:
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        value = Headers(scope=scope).get(self.header_name) or self.generate_value()
        if value is None:
            await self.app(scope, receive, send)
            return

        scope.setdefault("state", {})[self.context_key] = value
        set_log_context(**{self.context_key: value})

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, value)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            if self.clear_context_on_finish:
                clear_log_context()
