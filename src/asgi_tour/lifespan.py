# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Lifespan events of TourServer.

uvicorn opens one ``lifespan`` scope per process and sends
``lifespan.startup`` before serving and ``lifespan.shutdown`` on exit. The
tour's route groups hold no resources, so startup only prints the route
table (at DEBUG) and a summary line on ``asgi_tour.lifespan``::

    TourServer started with 10 routes
      GET /hello/{name}        [hello]
      POST /hello              [hello]
      ...

A failing ``startup()`` is reported as ``lifespan.startup.failed`` and
uvicorn refuses to serve. A failing ``shutdown()`` is logged and the
shutdown is still confirmed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .types import Receive, Scope, Send

if TYPE_CHECKING:
    from .server import TourServer

__all__ = ["ServerLifespan"]

logger = logging.getLogger("asgi_tour.lifespan")


class ServerLifespan:
    """Answers the lifespan scope on behalf of a TourServer."""

    __slots__ = ("server", "_started")

    def __init__(self, server: TourServer) -> None:
        self.server = server
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        while True:
            event = (await receive())["type"]
            if event == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as e:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(e)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif event == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception:
                    logger.exception("Shutdown failed")
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        routes = self.server.router.routes
        for route in routes:
            logger.debug(f"  {route.describe():<24} [{route.group}]")
        self._started = True
        logger.info(f"TourServer started with {len(routes)} routes")

    async def shutdown(self) -> None:
        self._started = False
        logger.info("TourServer stopped")
