# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Middleware wrapped around the tour dispatcher.

Each module in this package defines one ``BaseMiddleware`` subclass, which
registers itself under ``middleware_name`` when the module is imported.
``middleware_chain`` then wraps the dispatcher with every enabled
middleware, lowest ``middleware_order`` outermost::

    ErrorMiddleware (100) -> LoggingMiddleware (200) -> Dispatcher

Both built-ins are on by default. A switch mapping turns them on or off by
name with booleans or ``"on"``/``"off"`` strings, and per-name keyword
options reach the constructors::

    app = middleware_chain({"logging": "off"}, Dispatcher(router), options={"errors": {"debug": True}})
"""

from __future__ import annotations

import importlib
import pkgutil
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["BaseMiddleware", "MIDDLEWARE_REGISTRY", "middleware_chain"]

MIDDLEWARE_REGISTRY: dict[str, type[BaseMiddleware]] = {}

_SWITCH_ON = frozenset({"on", "true", "yes", "1"})


class BaseMiddleware(ABC):
    """An ASGI app wrapping the next one in the chain.

    Class attributes:
        middleware_name: Registry key and switch name. Defaults to the class name.
        middleware_order: Position in the chain, lower is outer.
        middleware_default: Whether the middleware runs when no switch names it.
    """

    middleware_name: str = ""
    middleware_order: int = 500
    middleware_default: bool = False

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp, **kwargs: Any) -> None:
        self.app = app

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.middleware_name = cls.middleware_name or cls.__name__
        if cls.middleware_name in MIDDLEWARE_REGISTRY:
            raise ValueError(f"Middleware name '{cls.middleware_name}' already registered")
        MIDDLEWARE_REGISTRY[cls.middleware_name] = cls

    @abstractmethod
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None: ...


def _switch(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in _SWITCH_ON
    return bool(value)


def middleware_chain(
    switches: Mapping[str, Any] | None,
    app: ASGIApp,
    options: Mapping[str, Mapping[str, Any]] | None = None,
) -> ASGIApp:
    """Wrap ``app`` with the enabled middleware and return the outermost one.

    Raises:
        ValueError: A switch names a middleware that is not registered.
    """
    switches = {name: _switch(value) for name, value in (switches or {}).items()}
    unknown = sorted(set(switches) - set(MIDDLEWARE_REGISTRY))
    if unknown:
        raise ValueError(f"Unknown middleware: {', '.join(unknown)}")

    enabled = sorted(
        (cls for name, cls in MIDDLEWARE_REGISTRY.items() if switches.get(name, cls.middleware_default)),
        key=lambda cls: cls.middleware_order,
    )
    options = options or {}
    # innermost first, so the lowest order ends up outside
    for cls in reversed(enabled):
        app = cls(app, **(options.get(cls.middleware_name) or {}))
    return app


for _module in pkgutil.iter_modules(__path__):
    if not _module.name.startswith("_"):
        importlib.import_module(f"{__name__}.{_module.name}")
