"""Pure helpers used when building an access log record."""

from typing import Any, Collection, Dict, Mapping, Sequence

from reqlog.channel import RequestInfo
from reqlog.observer import ResponseStats


def is_ignored(uri: str, ignored_paths: Collection[str]) -> bool:
    """Return True when ``uri`` is listed verbatim in ``ignored_paths``.

    Exact match only: no prefixes, globs or case folding.
    """
    return uri in ignored_paths


def resolve_remote_address(request: RequestInfo, header_names: Sequence[str]) -> str:
    """Pick the address to log for ``request``.

    Headers are tried in order and the first one with a non-empty value is
    used as-is (e.g. ``X-Real-IP`` set by a reverse proxy). Without a match
    the connection-level address is used.
    """
    for name in header_names:
        value = request.headers.get(name)
        if value:
            return value
    return request.remote_addr


def build_log_fields(
    request: RequestInfo,
    addr: str,
    stats: ResponseStats,
    duration_ms: float,
    custom_fields: Mapping[str, Any],
) -> Dict[str, Any]:
    fields = {
        "http_addr": addr,
        "http_method": request.method,
        "http_uri": request.uri,
        "http_proto": request.proto,
        "http_status": stats.status,
        "http_size": stats.size,
        "http_duration": round(duration_ms, 3),
    }
    # Custom fields go last so they win on key collisions.
    fields.update(custom_fields)
    return fields
