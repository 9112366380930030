# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""End-to-end tests: TourServer driven through the ASGI interface.

Every route of the tour is exercised through the full stack (middleware
chain, dispatcher, router, handler) with mock receive/send.
"""

from __future__ import annotations

import logging
from typing import Any

import orjson
import pytest

from asgi_tour import TourServer
from asgi_tour.lifespan import ServerLifespan
from asgi_tour.routing import RouteGroup

BOUNDARY = "tourboundary"


class MockSend:
    """Capture ASGI send messages for testing."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def status(self) -> int:
        return self.messages[0]["status"]

    @property
    def raw_headers(self) -> list[tuple[bytes, bytes]]:
        return self.messages[0]["headers"]

    def header(self, name: bytes) -> bytes | None:
        for key, value in self.raw_headers:
            if key == name:
                return value
        return None

    @property
    def text(self) -> str:
        body = b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )
        return body.decode()


@pytest.fixture(scope="module")
def server() -> TourServer:
    return TourServer(argv=[])


async def call(
    server: TourServer,
    method: str,
    path: str,
    body: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    query_string: bytes = b"",
    raw_path: bytes | None = None,
) -> MockSend:
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string,
        "headers": headers or [],
        "client": ("127.0.0.1", 50000),
    }
    if raw_path is not None:
        scope["raw_path"] = raw_path
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    send = MockSend()
    await server(scope, receive, send)
    return send


class TestHello:
    @pytest.mark.asyncio
    async def test_get_name(self, server: TourServer) -> None:
        send = await call(server, "GET", "/hello/world")
        assert send.status == 200
        assert send.text == "Hello world!"
        assert send.header(b"content-type") == b"text/plain; charset=utf-8"

    @pytest.mark.asyncio
    async def test_get_decoded_name(self, server: TourServer) -> None:
        send = await call(server, "GET", "/hello/big world")
        assert send.text == "Hello big world!"

    @pytest.mark.asyncio
    async def test_encoded_slash_stays_in_name(self, server: TourServer) -> None:
        send = await call(server, "GET", "/hello/a/b", raw_path=b"/hello/a%2Fb")
        assert send.status == 200
        assert send.text == "Hello a/b!"

    @pytest.mark.asyncio
    async def test_raw_path_takes_precedence(self, server: TourServer) -> None:
        send = await call(server, "GET", "/hello/big world", raw_path=b"/hello/big%20world")
        assert send.text == "Hello big world!"

    @pytest.mark.asyncio
    async def test_post_body(self, server: TourServer) -> None:
        send = await call(
            server,
            "POST",
            "/hello",
            b"world",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        assert send.status == 200
        assert send.text == "Hello world!"

    @pytest.mark.asyncio
    async def test_post_empty_body(self, server: TourServer) -> None:
        send = await call(server, "POST", "/hello")
        assert send.text == "Hello !"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path",
        [("GET", "/hello"), ("GET", "/hello/"), ("GET", "/hello/a/b"), ("PUT", "/hello"),
         ("DELETE", "/hello/world"), ("GET", "/nowhere")],
    )
    async def test_not_found(self, server: TourServer, method: str, path: str) -> None:
        send = await call(server, method, path)
        assert send.status == 404
        assert send.text == "Not found"


class TestParams:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("segment, passed", [("42", "42"), ("-7", "-7"), ("+5", "5")])
    async def test_path_int(self, server: TourServer, segment: str, passed: str) -> None:
        send = await call(server, "GET", f"/int/{segment}")
        assert send.status == 200
        assert send.text == f"Passed: {passed}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("segment", ["abc", "4.2", "2147483648"])
    async def test_path_not_int(self, server: TourServer, segment: str) -> None:
        send = await call(server, "GET", f"/int/{segment}")
        assert send.status == 404

    @pytest.mark.asyncio
    async def test_query_int(self, server: TourServer) -> None:
        send = await call(server, "GET", "/int", query_string=b"val=42")
        assert send.status == 200
        assert send.text == "Passed: 42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [b"", b"val=", b"val=abc", b"other=1"])
    async def test_query_missing_or_invalid(self, server: TourServer, query: bytes) -> None:
        send = await call(server, "GET", "/int", query_string=query)
        assert send.status == 404


class TestHeaders:
    @pytest.mark.asyncio
    async def test_headers_listed_in_order(self, server: TourServer) -> None:
        send = await call(
            server,
            "GET",
            "/headers",
            headers=[(b"host", b"localhost:9000"), (b"request-header", b"request value")],
        )
        assert send.status == 200
        assert send.text == "host: localhost:9000\nrequest-header: request value"
        assert send.header(b"response-header") == b"response value"

    @pytest.mark.asyncio
    async def test_no_headers(self, server: TourServer) -> None:
        send = await call(server, "GET", "/headers")
        assert send.text == ""

    @pytest.mark.asyncio
    async def test_cookies(self, server: TourServer) -> None:
        send = await call(
            server,
            "GET",
            "/cookies",
            headers=[(b"cookie", b"request-cookie=request_value; other=1")],
        )
        assert send.status == 200
        assert send.text == "request-cookie: request_value\nother: 1"
        assert send.header(b"set-cookie") == b"response-cookie=response_value"

    @pytest.mark.asyncio
    async def test_no_cookies(self, server: TourServer) -> None:
        send = await call(server, "GET", "/cookies")
        assert send.text == ""
        assert send.header(b"set-cookie") == b"response-cookie=response_value"


class TestEntity:
    @pytest.mark.asyncio
    async def test_bracketed_name(self, server: TourServer) -> None:
        send = await call(server, "POST", "/entity", b"(world)")
        assert send.status == 200
        assert send.text == "Hello world!"

    @pytest.mark.asyncio
    async def test_empty_brackets(self, server: TourServer) -> None:
        send = await call(server, "POST", "/entity", b"()")
        assert send.text == "Hello !"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [b"world", b"(world", b"(a)\n(b)", b"(a\rb)", "(a\u2028b)".encode(), b""]
    )
    async def test_invalid_value(self, server: TourServer, body: bytes) -> None:
        send = await call(server, "POST", "/entity", body)
        assert send.status == 422
        assert send.text == f"Invalid value: {body.decode()}"


class TestJson:
    @pytest.mark.asyncio
    async def test_valid(self, server: TourServer) -> None:
        send = await call(
            server,
            "POST",
            "/json",
            orjson.dumps({"name": "world"}),
            headers=[(b"content-type", b"application/json")],
        )
        assert send.status == 200
        assert send.text == "Hello world!"

    @pytest.mark.asyncio
    async def test_malformed(self, server: TourServer) -> None:
        send = await call(server, "POST", "/json", b'{"name": ')
        assert send.status == 400
        assert send.text.startswith("Malformed message body: Invalid JSON")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b'{"nom": "world"}', b'{"name": 1}', b'"world"'])
    async def test_wrong_shape(self, server: TourServer, body: bytes) -> None:
        send = await call(server, "POST", "/json", body)
        assert send.status == 422
        assert send.text.startswith("Could not decode JSON")


class TestMultipart:
    @pytest.mark.asyncio
    async def test_part_names(self, server: TourServer) -> None:
        body = (
            f"--{BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="text"\r\n'
            "\r\n"
            "request value\r\n"
            f"--{BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="file"; filename="file.txt"\r\n'
            "Content-Type: text/plain\r\n"
            "\r\n"
            "file content\r\n"
            f"--{BOUNDARY}\r\n"
            "Content-Disposition: form-data\r\n"
            "\r\n"
            "anonymous\r\n"
            f"--{BOUNDARY}--\r\n"
        ).encode()
        send = await call(
            server,
            "POST",
            "/multipart",
            body,
            headers=[(b"content-type", f"multipart/form-data; boundary={BOUNDARY}".encode())],
        )
        assert send.status == 200
        assert send.text == "text\nfile\n"

    @pytest.mark.asyncio
    async def test_not_multipart(self, server: TourServer) -> None:
        send = await call(
            server,
            "POST",
            "/multipart",
            b"text=request+value",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        assert send.status == 422
        assert send.text == "Missing boundary extension to Content-Type"

    @pytest.mark.asyncio
    async def test_truncated_body(self, server: TourServer) -> None:
        body = (
            f"--{BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="text"\r\n'
            "\r\n"
            "request val"
        ).encode()
        send = await call(
            server,
            "POST",
            "/multipart",
            body,
            headers=[(b"content-type", f"multipart/form-data; boundary={BOUNDARY}".encode())],
        )
        assert send.status == 400
        assert send.text.startswith("Malformed message body")


class TestWebSocketEcho:
    @staticmethod
    async def run_ws(server: TourServer, path: str, *frames: dict[str, Any]) -> list[dict[str, Any]]:
        incoming = [{"type": "websocket.connect"}, *frames, {"type": "websocket.disconnect", "code": 1000}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return incoming.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        scope = {
            "type": "websocket",
            "path": path,
            "query_string": b"",
            "headers": [],
            "client": ("127.0.0.1", 50000),
        }
        await server(scope, receive, send)
        return sent

    @pytest.mark.asyncio
    async def test_echo_text(self, server: TourServer) -> None:
        sent = await self.run_ws(
            server,
            "/wsecho",
            {"type": "websocket.receive", "text": "hello"},
            {"type": "websocket.receive", "text": "again"},
        )
        assert sent == [
            {"type": "websocket.accept"},
            {"type": "websocket.send", "text": "hello"},
            {"type": "websocket.send", "text": "again"},
        ]

    @pytest.mark.asyncio
    async def test_binary_dropped(self, server: TourServer) -> None:
        sent = await self.run_ws(
            server,
            "/wsecho",
            {"type": "websocket.receive", "bytes": b"\x00\x01"},
            {"type": "websocket.receive", "text": "text"},
        )
        assert sent == [
            {"type": "websocket.accept"},
            {"type": "websocket.send", "text": "text"},
        ]

    @pytest.mark.asyncio
    async def test_unknown_path_refused(self, server: TourServer) -> None:
        sent = await self.run_ws(server, "/nowhere")
        assert sent == [{"type": "websocket.close", "code": 1000, "reason": ""}]


class TestServer:
    @pytest.mark.asyncio
    async def test_lifespan(self, caplog: pytest.LogCaptureFixture) -> None:
        server = TourServer(argv=[])
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return incoming.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        with caplog.at_level(logging.INFO, logger="asgi_tour.lifespan"):
            await server({"type": "lifespan"}, receive, send)
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.complete"},
        ]
        assert "started with 10 routes" in caplog.text
        assert not server.lifespan.started

    @pytest.mark.asyncio
    async def test_lifespan_startup_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        server = TourServer(argv=[])
        sent: list[dict[str, Any]] = []

        async def failing_startup(self: ServerLifespan) -> None:
            raise RuntimeError("no start")

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        monkeypatch.setattr(ServerLifespan, "startup", failing_startup)
        await server({"type": "lifespan"}, receive, send)
        assert sent == [{"type": "lifespan.startup.failed", "message": "no start"}]

    def test_router_composition_order(self, server: TourServer) -> None:
        assert [g.name for g in server.router.groups] == [
            "hello",
            "params",
            "headers",
            "entity",
            "jsonbody",
            "forms",
            "wsecho",
        ]

    @pytest.mark.asyncio
    async def test_custom_groups(self) -> None:
        extra = RouteGroup("extra")

        @extra.get("/ping")
        async def ping(request: Any) -> dict[str, bool]:
            return {"pong": True}

        server = TourServer(argv=[], groups=[extra])
        send = await call(server, "GET", "/ping")
        assert send.status == 200
        assert orjson.loads(send.text) == {"pong": True}
        assert (await call(server, "GET", "/hello/world")).status == 404

    @pytest.mark.asyncio
    async def test_handler_error_is_500(self) -> None:
        broken = RouteGroup("broken")

        @broken.get("/boom")
        def boom(request: Any) -> str:
            raise RuntimeError("boom")

        server = TourServer(argv=[], groups=[broken], debug=False)
        send = await call(server, "GET", "/boom")
        assert send.status == 500
        assert send.text == "Internal Server Error"

    def test_repr(self, server: TourServer) -> None:
        assert repr(server).startswith("TourServer('http://127.0.0.1:9000'")

    def test_run_uses_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import uvicorn

        calls: list[tuple[Any, dict[str, Any]]] = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
        server = TourServer(argv=[], port=9005)
        server.run()
        assert calls == [(server, {"host": "127.0.0.1", "port": 9005, "log_level": "info"})]
