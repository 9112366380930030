# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI type definitions for asgi-tour.

Purpose
=======
Type aliases for the ASGI interface. Every layer of the tour (dispatcher,
middleware, request, response, websocket) speaks in these terms.

Type Definitions
================

Scope : MutableMapping[str, Any]
    Connection metadata. ``scope["type"]`` is one of:

    - ``"http"``: method, path, headers, query_string
    - ``"websocket"``: path, headers, subprotocols
    - ``"lifespan"``: startup/shutdown events

Message : MutableMapping[str, Any]
    A single event exchanged with the server, keyed by ``"type"``
    (``"http.request"``, ``"http.response.start"``, ``"websocket.receive"``...).

Receive : Callable[[], Awaitable[Message]]
    Pulls the next message from the client.

Send : Callable[[Message], Awaitable[None]]
    Pushes a message to the client.

ASGIApp : Callable[[Scope, Receive, Send], Awaitable[None]]
    The application callable.

Example
=======
::

    from asgi_tour.types import Receive, Scope, Send

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        await send({
            "type": "http.response.start",
            "status": 200,
            "headers": [[b"content-type", b"text/plain"]],
        })
        await send({"type": "http.response.body", "body": b"Hello!"})

Design Decisions
================
MutableMapping is used instead of TypedDict for Scope and Message: ASGI
servers add their own keys and real validation happens at runtime in the
Request, Response and WebSocket classes.

References
==========
- ASGI Specification: https://asgi.readthedocs.io/en/latest/specs/main.html
- ASGI HTTP/WebSocket Spec: https://asgi.readthedocs.io/en/latest/specs/www.html
"""

from typing import Any, Awaitable, Callable, MutableMapping

__all__ = ["Scope", "Message", "Receive", "Send", "ASGIApp"]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

# ASGI Receive - callable to receive messages
Receive = Callable[[], Awaitable[Message]]

# ASGI Send - callable to send messages
Send = Callable[[Message], Awaitable[None]]

# ASGI Application - the main callable
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]
