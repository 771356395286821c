"""Request logger: wraps a handler and emits one access record per request.

Usage::

    request_logger = RequestLogger(LoggerOptions(remote_address_headers=["X-Real-IP"]))
    app = request_logger.handler(my_handler)

A GET to ``/info/`` then logs, with the default logfmt setup::

    level=info event="Request received" http_addr=127.0.0.1:41634 http_method=GET
    http_uri=/info/ http_proto=HTTP/1.1 http_status=200 http_size=11 http_duration=0.005
"""

import functools
import time
from typing import Optional

from reqlog.channel import Handler, RequestInfo, ResponseWriter
from reqlog.observer import ResponseObserver, ResponseStats
from reqlog.schemas import LoggerOptions
from reqlog.sink import Sink, StructlogSink
from reqlog.utils.request_helpers import build_log_fields, is_ignored, resolve_remote_address


class RequestLogger:
    """Logs status, method, URI, protocol, remote address, size and duration."""

    def __init__(self, options: Optional[LoggerOptions] = None):
        self.options = options if options is not None else LoggerOptions()
        self.sink: Sink = self.options.sink if self.options.sink is not None else StructlogSink()

    def handler(self, next_handler: Handler) -> Handler:
        """Return ``next_handler`` wrapped with access logging."""

        @functools.wraps(next_handler)
        def logged(writer: ResponseWriter, request: RequestInfo) -> None:
            start = time.perf_counter()

            observer = ResponseObserver(writer)
            next_handler(observer, request)

            duration_ms = (time.perf_counter() - start) * 1000
            self.log_request(request, observer.stats, duration_ms)

        return logged

    def log_request(self, request: RequestInfo, stats: ResponseStats, duration_ms: float) -> None:
        """Emit the record for a finished request unless its URI is ignored."""
        if is_ignored(request.uri, self.options.ignored_paths):
            return

        addr = resolve_remote_address(request, self.options.remote_address_headers)
        fields = build_log_fields(request, addr, stats, duration_ms, self.options.custom_fields)
        self.sink.emit(self.options.message, fields)
