"""Structured log sinks and logging setup.

A sink receives the final ``(message, fields)`` pair for each logged
request. Formatting, destination and buffering are the sink's business;
the request logger only calls ``emit`` once per record.
"""

import logging
import sys
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import structlog

ACCESS_LOGGER_NAME = "reqlog.access"

_RENDERERS = ("logfmt", "json", "console")

# Keys filled in by structlog itself; record fields with these names are
# logged as ``fields.<key>``.
RESERVED_KEYS = frozenset({"event", "level", "log_level", "timestamp", "logger"})


@runtime_checkable
class Sink(Protocol):
    def emit(self, message: str, fields: Mapping[str, Any]) -> None:
        ...


class StructlogSink:
    """Default sink: log each record through a structlog logger at info level."""

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger if logger is not None else structlog.get_logger(ACCESS_LOGGER_NAME)

    def emit(self, message: str, fields: Mapping[str, Any]) -> None:
        safe = {
            f"fields.{key}" if key in RESERVED_KEYS else key: value
            for key, value in fields.items()
        }
        self._logger.bind(**safe).info(message)


class LoggingSink:
    """Sink for a plain stdlib ``logging.Logger``.

    Fields are passed through ``extra`` for handlers that read record
    attributes, and appended to the message as ``key=value`` pairs.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(ACCESS_LOGGER_NAME)
        self._level = level

    def emit(self, message: str, fields: Mapping[str, Any]) -> None:
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        self._logger.log(
            self._level,
            "%s %s",
            message,
            pairs,
            extra={"fields": dict(fields)},
        )


def configure_logging(level: str = "INFO", renderer: str = "logfmt", stream=None) -> None:
    """Configure stdlib logging and structlog for the process.

    ``renderer`` selects the output format: ``logfmt`` (``key=value`` pairs),
    ``json`` or ``console``.
    """
    if renderer not in _RENDERERS:
        raise ValueError(f"Unknown log renderer {renderer!r}; expected one of {_RENDERERS}")

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stdout,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if renderer == "json":
        final = structlog.processors.JSONRenderer()
    elif renderer == "console":
        final = structlog.dev.ConsoleRenderer()
    else:
        final = structlog.processors.LogfmtRenderer(key_order=["timestamp", "level", "event"])

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            final,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )
