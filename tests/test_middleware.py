"""ASGI middleware tests using Starlette's TestClient."""

import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse, Response, StreamingResponse
from starlette.routing import Route, WebSocketRoute
from starlette.testclient import TestClient

from reqlog.logger import RequestLogger
from reqlog.middleware.request_logging import RequestLoggingMiddleware
from reqlog.schemas import LoggerOptions


async def bar(request):
    return PlainTextResponse("bar")


async def bad_gateway(request):
    return PlainTextResponse("Bad Gateway", status_code=502)


async def no_content(request):
    return Response(status_code=204)


async def stream(request):
    async def chunks():
        yield b"ab"
        yield b"cde"
        yield b"f"

    return StreamingResponse(chunks(), media_type="text/plain")


async def explode(request):
    raise RuntimeError("boom")


async def echo_ws(websocket):
    await websocket.accept()
    await websocket.send_text(await websocket.receive_text())
    await websocket.close()


def build_client(options: LoggerOptions) -> TestClient:
    app = Starlette(routes=[
        Route("/foo", bar),
        Route("/foo", bad_gateway, methods=["POST"]),
        Route("/empty", no_content),
        Route("/stream", stream),
        Route("/explode", explode),
        WebSocketRoute("/ws", echo_ws),
    ])
    app.add_middleware(RequestLoggingMiddleware, options=options)
    return TestClient(app, raise_server_exceptions=True)


class TestRequestLoggingMiddleware:
    def test_get_logged(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        resp = client.get("/foo?q=search-term&print=1")

        assert resp.status_code == 200
        assert resp.text == "bar"
        assert len(sink.records) == 1
        message, fields = sink.records[0]
        assert message == "Request received"
        assert fields["http_status"] == 200
        assert fields["http_method"] == "GET"
        assert fields["http_uri"] == "/foo?q=search-term&print=1"
        assert fields["http_proto"] == "HTTP/1.1"
        assert fields["http_size"] == 3
        assert fields["http_addr"].startswith("testclient")

    def test_post_error_status(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        resp = client.post("/foo")

        assert resp.status_code == 502
        assert sink.fields["http_status"] == 502
        assert sink.fields["http_method"] == "POST"
        assert sink.fields["http_size"] == len("Bad Gateway")

    def test_not_found_logged(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        client.get("/missing")
        assert sink.fields["http_status"] == 404

    def test_empty_body(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        client.get("/empty")
        assert sink.fields["http_status"] == 204
        assert sink.fields["http_size"] == 0

    def test_streaming_size(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        resp = client.get("/stream")
        assert resp.text == "abcdef"
        assert sink.fields["http_size"] == 6

    def test_ignored_path(self, sink):
        client = build_client(LoggerOptions(sink=sink, ignored_paths=["/foo"]))
        resp = client.get("/foo")
        assert resp.status_code == 200
        assert sink.records == []

    def test_ignored_path_exact_match(self, sink):
        client = build_client(LoggerOptions(sink=sink, ignored_paths=["/foo"]))
        client.get("/foo?x=1")
        assert len(sink.records) == 1

    def test_remote_address_header(self, sink):
        client = build_client(LoggerOptions(sink=sink, remote_address_headers=["X-Real-IP"]))
        client.get("/foo", headers={"X-Real-IP": "98.76.54.32"})
        assert sink.fields["http_addr"] == "98.76.54.32"

    def test_custom_fields(self, sink):
        client = build_client(LoggerOptions(sink=sink, custom_fields={"service": "billing"}))
        client.get("/foo")
        assert sink.fields["service"] == "billing"

    def test_exception_propagates_without_record(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        with pytest.raises(RuntimeError, match="boom"):
            client.get("/explode")
        assert sink.records == []

    def test_websocket_passes_through(self, sink):
        client = build_client(LoggerOptions(sink=sink))
        with client.websocket_connect("/ws") as ws:
            ws.send_text("hi")
            assert ws.receive_text() == "hi"
        assert sink.records == []

    def test_accepts_existing_logger(self, sink):
        app = Starlette(routes=[Route("/foo", bar)])
        request_logger = RequestLogger(LoggerOptions(sink=sink, message="custom"))
        app.add_middleware(RequestLoggingMiddleware, logger=request_logger)

        TestClient(app).get("/foo")
        assert sink.records[0][0] == "custom"
