"""reqlog demo application.

A small FastAPI app with the access logging middleware mounted, configured
from ``REQLOG_`` environment variables. Run with ``python -m reqlog.main``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, StreamingResponse

from reqlog.config import Settings, get_settings
from reqlog.middleware.request_logging import RequestLoggingMiddleware
from reqlog.sink import configure_logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None, sink=None) -> FastAPI:
    """Build the demo app; ``sink`` overrides the default structlog sink."""
    settings = settings or get_settings()

    app = FastAPI(title="reqlog demo", version=VERSION)
    app.add_middleware(RequestLoggingMiddleware, options=settings.to_options(sink=sink))

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": VERSION}

    @app.get("/hello", response_class=PlainTextResponse)
    async def hello():
        return "hello world"

    @app.get("/stream")
    async def stream(chunks: int = 3):
        """Stream ``chunks`` lines, one body message each."""

        async def lines():
            for i in range(chunks):
                yield f"chunk {i}\n".encode()

        return StreamingResponse(lines(), media_type="text/plain")

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("reqlog demo listening on %s:%d", settings.app_host, settings.app_port)
    # uvicorn's own access log would duplicate ours.
    uvicorn.run(create_app(settings), host=settings.app_host, port=settings.app_port, access_log=False)
