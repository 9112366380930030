# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Turns exceptions from the dispatcher into plain-text HTTP answers.

    HTTPNotFound            -> 404 "Not found"
    MalformedMessageBody    -> 400 "Malformed message body: ..."
    InvalidMessageBody      -> 422 "Invalid value: ..." and similar
    MediaTypeMismatch       -> 415
    anything else           -> 500 "Internal Server Error", logged on ``asgi_tour``

With ``debug`` on, the 500 body carries the traceback. When the handler
had already started its response the exception is re-raised instead, and
uvicorn drops the connection. WebSocket and lifespan scopes pass through.
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any

from . import BaseMiddleware
from ..exceptions import HTTPException

if TYPE_CHECKING:
    from ..types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("asgi_tour")


async def _send_plain(
    send: Send, status: int, text: str, extra: list[tuple[str, str]] | None = None
) -> None:
    body = text.encode("utf-8")
    headers = [(b"content-type", b"text/plain; charset=utf-8"), (b"content-length", str(len(body)).encode())]
    headers += [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in extra or ()]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})


class ErrorMiddleware(BaseMiddleware):
    middleware_name = "errors"
    middleware_order = 100
    middleware_default = True

    __slots__ = ("debug",)

    def __init__(self, app: ASGIApp, debug: bool = False, **kwargs: Any) -> None:
        super().__init__(app, **kwargs)
        self.debug = debug

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def watch(message: Message) -> None:
            nonlocal started
            started = started or message["type"] == "http.response.start"
            await send(message)

        try:
            await self.app(scope, receive, watch)
        except HTTPException as e:
            if started:
                raise
            await _send_plain(send, e.status_code, e.detail or "", e.headers)
        except Exception as e:
            logger.exception(f"Unhandled error on {scope.get('method')} {scope.get('path')}: {e}")
            if started:
                raise
            text = "Internal Server Error"
            if self.debug:
                text += f"\n\n{traceback.format_exc()}"
            await _send_plain(send, 500, text)
