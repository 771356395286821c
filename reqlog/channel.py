"""Response channel contracts and the per-request snapshot.

A handler receives a ``ResponseWriter`` plus a ``RequestInfo``. The base
writer contract only covers status and body writes; streaming flushes and
raw connection takeover are separate optional capabilities that concrete
writers may or may not provide, so callers probe for them at runtime.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from starlette.datastructures import Headers


class ResponseWriter(Protocol):
    def write_header(self, status: int) -> None:
        ...

    def write(self, data: bytes) -> int:
        ...


@runtime_checkable
class Flusher(Protocol):
    """Writers that can push buffered data to the client immediately."""

    def flush(self) -> None:
        ...


@runtime_checkable
class ConnectionHijacker(Protocol):
    """Writers that can hand the underlying connection over to the caller.

    What ``hijack`` returns is transport specific (typically the socket and
    its buffered reader/writer).
    """

    def hijack(self) -> Any:
        ...


@dataclass(frozen=True)
class RequestInfo:
    """Read-only view of the inbound request taken when it is observed."""

    method: str
    uri: str
    proto: str = "HTTP/1.1"
    remote_addr: str = ""
    headers: Headers = field(default_factory=Headers)

    @classmethod
    def build(
        cls,
        method: str,
        uri: str,
        proto: str = "HTTP/1.1",
        remote_addr: str = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> "RequestInfo":
        """Create a snapshot from plain values; header lookups are case-insensitive."""
        return cls(
            method=method,
            uri=uri,
            proto=proto,
            remote_addr=remote_addr,
            headers=Headers(headers=dict(headers or {})),
        )

    @classmethod
    def from_scope(cls, scope: Mapping[str, Any]) -> "RequestInfo":
        """Create a snapshot from an ASGI ``http`` scope.

        The URI is rebuilt from ``raw_path`` (falling back to ``path``) and the
        query string, so it matches what the client put on the request line.
        """
        raw_path = scope.get("raw_path")
        # Some servers leave the query string on raw_path.
        path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else scope.get("path", "")
        query = scope.get("query_string", b"")
        uri = f"{path}?{query.decode('latin-1')}" if query else path

        client = scope.get("client")
        remote_addr = f"{client[0]}:{client[1]}" if client else ""

        return cls(
            method=scope.get("method", "GET"),
            uri=uri,
            proto=f"HTTP/{scope.get('http_version', '1.1')}",
            remote_addr=remote_addr,
            headers=Headers(scope=scope),
        )


Handler = Callable[[ResponseWriter, RequestInfo], None]
