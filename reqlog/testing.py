"""In-memory writers and sinks for testing handlers wrapped by reqlog."""

from typing import Any, Dict, List, Mapping, Tuple

from starlette.datastructures import MutableHeaders


class PlainWriter:
    """Writer implementing only the base contract (no flush, no hijack)."""

    def __init__(self):
        self.code = 200
        self.body = bytearray()

    def write_header(self, status: int) -> None:
        self.code = status

    def write(self, data: bytes) -> int:
        self.body.extend(data)
        return len(data)


class ResponseRecorder(PlainWriter):
    """Records everything a handler does to its response.

    Supports every optional capability: ``flush`` counts calls and
    ``hijack`` returns ``connection`` (any object the test supplies).
    """

    def __init__(self, connection: Any = None):
        super().__init__()
        self.headers = MutableHeaders()
        self.flushed = 0
        self.hijacked = False
        self.connection = connection

    def flush(self) -> None:
        self.flushed += 1

    def hijack(self) -> Any:
        self.hijacked = True
        return self.connection

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


class RecordingSink:
    """Sink that keeps every emitted ``(message, fields)`` pair."""

    def __init__(self):
        self.records: List[Tuple[str, Dict[str, Any]]] = []

    def emit(self, message: str, fields: Mapping[str, Any]) -> None:
        self.records.append((message, dict(fields)))

    @property
    def fields(self) -> Dict[str, Any]:
        """Fields of the most recent record."""
        return self.records[-1][1]
