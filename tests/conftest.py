"""Shared pytest fixtures for reqlog tests."""

import io

import pytest
import structlog

from reqlog.channel import RequestInfo
from reqlog.sink import StructlogSink
from reqlog.testing import RecordingSink, ResponseRecorder


@pytest.fixture
def sink():
    """Sink that keeps records in memory."""
    return RecordingSink()


@pytest.fixture
def recorder():
    return ResponseRecorder()


@pytest.fixture
def log_buffer():
    """StringIO receiving logfmt-rendered records."""
    return io.StringIO()


@pytest.fixture
def logfmt_sink(log_buffer):
    """StructlogSink rendering ``key=value`` text into ``log_buffer``."""
    logger = structlog.wrap_logger(
        structlog.PrintLogger(file=log_buffer),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.LogfmtRenderer(key_order=["level", "event"]),
        ],
    )
    return StructlogSink(logger)


# ---- Factory Helpers ----

@pytest.fixture
def make_request():
    """Factory fixture to create a RequestInfo."""
    def _make(method="GET", uri="/foo", **kwargs):
        defaults = {"proto": "HTTP/1.1", "remote_addr": "8.8.4.4"}
        defaults.update(kwargs)
        return RequestInfo.build(method, uri, **defaults)
    return _make


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog.configure() a test performs."""
    yield
    structlog.reset_defaults()
