# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""TourServer: the ASGI app uvicorn runs for the tour.

It reads its settings through ServerConfig, composes the route groups into
one Router in match order, and wraps the Dispatcher in the middleware
chain. Lifespan scopes are answered by ServerLifespan.

Usage:
    from asgi_tour import TourServer

    server = TourServer()
    server.run()  # Starts uvicorn on 127.0.0.1:9000

Architecture:
    TourServer
        ├── config: ServerConfig
        ├── router: Router (hello, params, headers, entity, jsonbody, forms, wsecho)
        ├── dispatcher: Middleware chain → Dispatcher
        └── lifespan: ServerLifespan

Request flow:
    ASGI Server (uvicorn) → TourServer.__call__
        → Middleware chain (errors → logging)
        → Dispatcher → router.match(scope_type, method, path, query)
        → handler(request, **params) → response.set_result()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .dispatcher import Dispatcher
from .lifespan import ServerLifespan
from .middleware import middleware_chain
from .routing import RouteGroup, Router
from .server_config import ServerConfig
from .types import ASGIApp, Receive, Scope, Send

__all__ = ["TourServer"]


class TourServer:
    """The tour routes behind the middleware chain, plus lifespan handling.

    ``groups`` defaults to ``routes.ALL_GROUPS``; tests pass their own.
    """

    __slots__ = ("config", "router", "dispatcher", "lifespan", "logger")

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
        debug: bool | None = None,
        middleware: dict[str, Any] | None = None,
        groups: Iterable[RouteGroup] | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self.config = ServerConfig(host, port, log_level, debug, middleware, argv)
        if groups is None:
            from .routes import ALL_GROUPS

            groups = ALL_GROUPS
        self.router = Router().include(*groups)
        self.logger = logging.getLogger("asgi_tour")
        self.lifespan = ServerLifespan(self)
        self.dispatcher: ASGIApp = middleware_chain(
            self.config.middleware,
            Dispatcher(self.router),
            options=self.config.middleware_options(),
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self.lifespan(scope, receive, send)
        else:
            await self.dispatcher(scope, receive, send)

    def run(self) -> None:
        """Serve on the configured address until interrupted."""
        import uvicorn

        config = self.config
        self.logger.info(f"Starting server on {config.host}:{config.port}")
        uvicorn.run(self, host=config.host, port=config.port, log_level=config.log_level)

    def __repr__(self) -> str:
        return f"TourServer({self.config.url!r}, groups={[g.name for g in self.router.groups]!r})"
