"""Transparent response observer.

``ResponseObserver`` sits between a handler and the real response writer.
It forwards every call unchanged while recording the status code and the
number of body bytes written, and it keeps the optional ``flush`` and
``hijack`` capabilities of whatever writer it wraps.
"""

from typing import Any

from reqlog.channel import ConnectionHijacker, Flusher, ResponseWriter
from reqlog.exceptions import HijackNotSupportedError


class ResponseStats:
    """Status and size captured for a single response."""

    __slots__ = ("status", "size")

    def __init__(self):
        # A response that never sets a status explicitly goes out as 200.
        self.status = 200
        self.size = 0

    def record_status(self, status: int) -> None:
        self.status = status

    def record_write(self, count: int) -> None:
        self.size += count

    def __repr__(self) -> str:
        return f"ResponseStats(status={self.status}, size={self.size})"


class ResponseObserver:
    """Wrap a ``ResponseWriter`` and capture status and size.

    Capabilities are probed on the wrapped writer at call time, because
    the concrete writer type depends on the server and transport serving
    the request.
    """

    def __init__(self, writer: ResponseWriter):
        self._writer = writer
        self.stats = ResponseStats()

    @property
    def writer(self) -> ResponseWriter:
        return self._writer

    @property
    def status(self) -> int:
        return self.stats.status

    @property
    def size(self) -> int:
        return self.stats.size

    def write_header(self, status: int) -> None:
        self.stats.record_status(status)
        self._writer.write_header(status)

    def write(self, data: bytes) -> int:
        written = self._writer.write(data)
        self.stats.record_write(written or 0)
        return written

    def flush(self) -> None:
        if isinstance(self._writer, Flusher):
            self._writer.flush()

    def hijack(self) -> Any:
        if isinstance(self._writer, ConnectionHijacker):
            return self._writer.hijack()
        raise HijackNotSupportedError()

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined above (headers, etc.).
        if name == "_writer":
            raise AttributeError(name)
        return getattr(self._writer, name)
