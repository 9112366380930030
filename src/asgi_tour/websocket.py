# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""WebSocket sessions for the ``/wsecho`` route.

A matched websocket handler receives a ``WebSocket`` still in the
CONNECTING state and decides what happens to the handshake::

    async def echo(websocket):
        await websocket.accept()                     # CONNECTING -> CONNECTED
        async for message in websocket.iter_messages():
            if message.get("text") is not None:
                await websocket.send_text(message["text"])
        # client left                                # -> DISCONNECTED

Closing before ``accept()`` refuses the upgrade, and uvicorn answers it
with 403. The dispatcher does that for unmatched paths.

Only data frames reach the handler. uvicorn answers pings itself and
completes the close handshake, so ``receive()`` yields either
``websocket.receive`` messages (``text`` or ``bytes`` set) or raises
``WebSocketDisconnect``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from enum import IntEnum

from .datastructures import (
    Headers,
    QueryParams,
    headers_from_scope,
    query_params_from_scope,
    raw_path_from_scope,
)
from .exceptions import WebSocketDisconnect
from .types import Message, Receive, Scope, Send

__all__ = ["WebSocket", "WebSocketState"]


class WebSocketState(IntEnum):
    CONNECTING = 0
    CONNECTED = 1
    DISCONNECTED = 2


class WebSocket:
    """One websocket connection over an ASGI scope."""

    __slots__ = ("_scope", "_receive", "_send", "_state", "_headers", "_query", "path_params")

    def __init__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "websocket":
            raise ValueError(f"Expected scope type 'websocket', got '{scope.get('type')}'")
        self._scope = scope
        self._receive = receive
        self._send = send
        self._state = WebSocketState.CONNECTING
        self._headers: Headers | None = None
        self._query: QueryParams | None = None
        self.path_params: dict[str, object] = {}

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def connection_state(self) -> WebSocketState:
        return self._state

    @property
    def path(self) -> str:
        return str(self._scope.get("path", "/"))

    @property
    def raw_path(self) -> str:
        return raw_path_from_scope(self._scope)

    @property
    def headers(self) -> Headers:
        if self._headers is None:
            self._headers = headers_from_scope(self._scope)
        return self._headers

    @property
    def query_params(self) -> QueryParams:
        if self._query is None:
            self._query = query_params_from_scope(self._scope)
        return self._query

    @property
    def client(self) -> str:
        """``host:port`` of the peer, for log lines."""
        peer = self._scope.get("client")
        return f"{peer[0]}:{peer[1]}" if peer else "unknown"

    def _expect(self, state: WebSocketState, action: str) -> None:
        if self._state != state:
            raise RuntimeError(f"Cannot {action}: connection in {self._state.name} state")

    async def accept(self) -> None:
        """Complete the handshake: consume ``websocket.connect``, answer ``websocket.accept``."""
        self._expect(WebSocketState.CONNECTING, "accept")
        message = await self._receive()
        if message["type"] != "websocket.connect":
            raise RuntimeError(f"Expected websocket.connect, got {message['type']}")
        await self._send({"type": "websocket.accept"})
        self._state = WebSocketState.CONNECTED

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Send ``websocket.close`` once; later calls do nothing."""
        if self._state == WebSocketState.DISCONNECTED:
            return
        await self._send({"type": "websocket.close", "code": code, "reason": reason})
        self._state = WebSocketState.DISCONNECTED

    async def receive(self) -> Message:
        """Next ``websocket.receive`` message.

        Raises:
            WebSocketDisconnect: The client went away.
        """
        self._expect(WebSocketState.CONNECTED, "receive")
        message = await self._receive()
        if message["type"] == "websocket.disconnect":
            self._state = WebSocketState.DISCONNECTED
            raise WebSocketDisconnect(code=message.get("code", 1000), reason=message.get("reason") or "")
        return message

    async def receive_text(self) -> str:
        message = await self.receive()
        if message.get("bytes") is not None:
            raise TypeError("Received binary message. Use receive_bytes() for binary data.")
        return message.get("text") or ""

    async def receive_bytes(self) -> bytes:
        message = await self.receive()
        if message.get("text") is not None:
            raise TypeError("Received text message. Use receive_text() for text data.")
        return message.get("bytes") or b""

    async def iter_messages(self) -> AsyncIterator[Message]:
        """Data messages until the client disconnects; the disconnect is not raised."""
        while True:
            try:
                message = await self.receive()
            except WebSocketDisconnect:
                return
            yield message

    async def send_text(self, data: str) -> None:
        self._expect(WebSocketState.CONNECTED, "send")
        await self._send({"type": "websocket.send", "text": data})

    async def send_bytes(self, data: bytes) -> None:
        self._expect(WebSocketState.CONNECTED, "send")
        await self._send({"type": "websocket.send", "bytes": data})
