"""reqlog — HTTP request logging middleware backed by structlog."""

from reqlog.channel import ConnectionHijacker, Flusher, Handler, RequestInfo, ResponseWriter
from reqlog.exceptions import HijackNotSupportedError, ReqlogError
from reqlog.logger import RequestLogger
from reqlog.middleware.request_logging import RequestLoggingMiddleware
from reqlog.observer import ResponseObserver, ResponseStats
from reqlog.schemas import LoggerOptions
from reqlog.sink import LoggingSink, Sink, StructlogSink, configure_logging

__all__ = [
    "ConnectionHijacker",
    "Flusher",
    "Handler",
    "HijackNotSupportedError",
    "LoggerOptions",
    "LoggingSink",
    "ReqlogError",
    "RequestInfo",
    "RequestLogger",
    "RequestLoggingMiddleware",
    "ResponseObserver",
    "ResponseStats",
    "ResponseWriter",
    "Sink",
    "StructlogSink",
    "configure_logging",
]
