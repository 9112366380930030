# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Dispatcher - Routes requests to handlers via the ordered Router.

HTTP:
    HttpRequest.init() → router.match() → handler(request, **params)
    → request.response.set_result(result) → response(scope, receive, send)

    Handlers may be sync or async (called through smartasync). A handler
    returning a Response sends it as is. No matching route raises
    HTTPNotFound, rendered by ErrorMiddleware.

WebSocket:
    router.match() → handler(websocket, **params)

    No matching route closes the connection before accept, which the ASGI
    server turns into a refused handshake.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartasync import smartasync

from .exceptions import HTTPNotFound
from .request import HttpRequest
from .response import Response
from .websocket import WebSocket, WebSocketState

if TYPE_CHECKING:
    from .routing import Router
    from .types import Receive, Scope, Send


class Dispatcher:
    """Innermost ASGI app: dispatches HTTP and WebSocket scopes to routes."""

    __slots__ = ("router", "logger")

    def __init__(self, router: Router) -> None:
        self.router = router
        self.logger = logging.getLogger("asgi_tour")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface - dispatch request to handler via router."""
        if scope["type"] == "http":
            await self._dispatch_http(scope, receive, send)
        elif scope["type"] == "websocket":
            await self._dispatch_websocket(scope, receive, send)
        else:
            raise ValueError(f"Unsupported scope type: {scope['type']!r}")

    async def _dispatch_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = HttpRequest()
        await request.init(scope, receive)

        match = self.router.match("http", request.method, request.raw_path, request.query_params)
        if match is None:
            raise HTTPNotFound()

        request.path_params = match.params
        self.logger.debug(
            f"[{request.id}] {request.method} {request.path} -> "
            f"{match.route.group}.{match.route.name}"
        )
        result = await smartasync(match.route.handler)(request, **match.params)

        if isinstance(result, Response):
            response = result
        else:
            response = request.response
            response.set_result(result)
        self.logger.debug(f"[{request.id}] handled in {request.age * 1000:.1f}ms")
        await response(scope, receive, send)

    async def _dispatch_websocket(self, scope: Scope, receive: Receive, send: Send) -> None:
        websocket = WebSocket(scope, receive, send)
        match = self.router.match("websocket", None, websocket.raw_path, websocket.query_params)
        if match is None:
            self.logger.info(f"WS {websocket.path} from {websocket.client}: no route, refused")
            await websocket.close()
            return

        websocket.path_params = match.params
        try:
            await smartasync(match.route.handler)(websocket, **match.params)
        except Exception:
            self.logger.exception(f"WS {websocket.path}: handler error")
            if websocket.connection_state == WebSocketState.CONNECTED:
                await websocket.close(code=1011)
            else:
                raise
