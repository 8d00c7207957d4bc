"""Request id middleware: binds ``X-Request-ID`` to the logging context.

An incoming header is reused; otherwise a UUID4 is generated. The id is echoed
back on the response and shows up in log lines through ``RequestIdFilter``.
"""

from __future__ import annotations

import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.packages.catalog.core.logger import set_request_id

REQUEST_ID_HEADER = b"x-request-id"


class RequestIdMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        raw = headers.get(REQUEST_ID_HEADER)
        request_id = raw.decode("latin-1") if raw else str(uuid.uuid4())
        set_request_id(request_id)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = response_headers
            await send(message)

        await self.app(scope, receive, send_with_request_id)
