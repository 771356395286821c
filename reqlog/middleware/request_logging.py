"""Access logging middleware for ASGI applications (Starlette, FastAPI)."""

import time
from typing import Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from reqlog.channel import RequestInfo
from reqlog.logger import RequestLogger
from reqlog.observer import ResponseStats
from reqlog.schemas import LoggerOptions


class RequestLoggingMiddleware:
    """Log every HTTP request through a ``RequestLogger``.

    ``send`` is wrapped rather than buffering the response, so streamed
    bodies still reach the client chunk by chunk. WebSocket and lifespan
    scopes pass through unobserved.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: Optional[RequestLogger] = None,
        options: Optional[LoggerOptions] = None,
    ) -> None:
        self.app = app
        self.logger = logger if logger is not None else RequestLogger(options)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request = RequestInfo.from_scope(scope)
        stats = ResponseStats()

        async def observed_send(message: Message) -> None:
            if message["type"] == "http.response.start":
                stats.record_status(message["status"])
            await send(message)
            if message["type"] == "http.response.body":
                stats.record_write(len(message.get("body", b"")))

        await self.app(scope, receive, observed_send)

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.log_request(request, stats, duration_ms)
