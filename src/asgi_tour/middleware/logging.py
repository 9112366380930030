# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Access log for tour requests and WebSocket sessions.

Two INFO lines per exchange on the ``asgi_tour.access`` logger::

    <- GET /int?val=42 from 127.0.0.1
    -> GET /int?val=42 200 (0.4ms)

    <- WS /wsecho from 127.0.0.1
    -> WS /wsecho closed 1000 (5012.3ms)

An ``HTTPException`` escaping the dispatcher (404 for an unknown route, 4xx
for a body that does not decode) is an ordinary answer and is logged at
INFO with its status. Only unexpected exceptions are logged at ERROR.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from . import BaseMiddleware
from ..exceptions import HTTPException

if TYPE_CHECKING:
    from ..types import Message, Receive, Scope, Send

access_logger = logging.getLogger("asgi_tour.access")


def _label(scope: Scope) -> str:
    verb = scope.get("method", "?") if scope["type"] == "http" else "WS"
    label = f"{verb} {scope.get('path', '/')}"
    query = scope.get("query_string", b"")
    if query:
        label += "?" + query.decode("latin-1")
    return label


def _elapsed_ms(started: float) -> str:
    return f"({(time.perf_counter() - started) * 1000:.1f}ms)"


class LoggingMiddleware(BaseMiddleware):
    """Logs arrival and outcome of every HTTP request and WebSocket session."""

    middleware_name = "logging"
    middleware_order = 200
    middleware_default = True

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        label = _label(scope)
        peer = (scope.get("client") or ("unknown",))[0]
        access_logger.info(f"<- {label} from {peer}")

        started = time.perf_counter()
        outcome = "closed"

        async def observe(message: Message) -> None:
            nonlocal outcome
            kind = message["type"]
            if kind == "http.response.start":
                outcome = str(message.get("status", 0))
            elif kind == "websocket.close" and outcome == "closed":
                outcome = f"closed {message.get('code', 1000)}"
            await send(message)

        try:
            await self.app(scope, receive, observe)
        except HTTPException as e:
            access_logger.info(f"-> {label} {e.status_code} {_elapsed_ms(started)}")
            raise
        except Exception as e:
            access_logger.error(f"-> {label} ERROR: {e} {_elapsed_ms(started)}")
            raise
        access_logger.info(f"-> {label} {outcome} {_elapsed_ms(started)}")
