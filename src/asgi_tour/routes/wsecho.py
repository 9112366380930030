# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""WebSocket echo.

    websocat 'ws://127.0.0.1:9000/wsecho'

Text frames are sent back unchanged, binary frames are dropped. Ping/pong
is answered by uvicorn before frames reach the handler.
"""

from __future__ import annotations

import logging

from ..routing import RouteGroup
from ..websocket import WebSocket

wsecho = RouteGroup("wsecho")

logger = logging.getLogger("asgi_tour.ws")


@wsecho.websocket("/wsecho")
async def echo(websocket: WebSocket) -> None:
    await websocket.accept()
    logger.info(f"WS {websocket.path}: {websocket.client} connected")
    echoed = 0
    async for message in websocket.iter_messages():
        text = message.get("text")
        if text is None:
            logger.debug(f"WS {websocket.path}: dropped binary frame")
            continue
        await websocket.send_text(text)
        echoed += 1
    logger.info(f"WS {websocket.path}: {websocket.client} disconnected after {echoed} messages")
