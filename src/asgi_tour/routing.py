# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Routing - route groups composed into an ordered first-match router.

Route groups
============
A ``RouteGroup`` is a named, ordered collection of routes declared with
decorators::

    hello = RouteGroup("hello")

    @hello.get("/hello/{name}")
    def greet(request, name):
        return f"Hello {name}!"

    @hello.post("/hello")
    def greet_body(request):
        return f"Hello {request.text()}!"

Groups are independent; the ``Router`` composes them in order and the first
route in the combined list that matches handles the request::

    router = Router().include(hello, params, headers)
    match = router.match("http", "GET", "/hello/world", QueryParams(b""))
    match.route.handler, match.params   # greet, {"name": "world"}

Path templates
==============
Segments are literal, ``{name}`` (any non-empty segment, as str) or
``{name:conv}`` with a registered converter:

    ====== ===================================================
    str    the segment itself (default)
    int    signed 32-bit decimal, optional + or - sign
    ====== ===================================================

Paths are matched in their percent-encoded form: the path is split on "/"
first and each segment is decoded afterwards, so ``/hello/a%2Fb`` is one
segment with the value ``a/b``.

A segment that does not convert is a non-match, never an error: the router
moves on and the request may end up as 404.

Query matchers
==============
``QueryParam(key, converter)`` makes a route depend on the query string. The
route matches only when ``key`` is present and its first value converts; the
converted value is passed to the handler as a keyword argument::

    @params.get("/int", query=[QueryParam("val", Number.parse, name="number")])
    def passed(request, number): ...

Matching is by HTTP method too. A wrong method is a non-match, so
``PUT /hello`` is answered 404 like any unknown path.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote

from .datastructures import QueryParams

__all__ = [
    "CONVERTERS",
    "PathTemplate",
    "QueryParam",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    "int32",
]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_INT_RE = re.compile(r"[+-]?[0-9]+")
_PARAM_RE = re.compile(r"^\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<conv>[a-z]+))?\}$")


def int32(value: str) -> int:
    """Convert a decimal string to a signed 32-bit int.

    Stricter than ``int()``: no surrounding whitespace, no underscores.

    Raises:
        ValueError: If the string is not a decimal integer or is out of range.
    """
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    number = int(value)
    if not INT32_MIN <= number <= INT32_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def _segment(value: str) -> str:
    if not value:
        raise ValueError("empty segment")
    return value


CONVERTERS: dict[str, Callable[[str], Any]] = {
    "str": _segment,
    "int": int32,
}


class PathTemplate:
    """Compiled path template such as ``/int/{n:int}``."""

    __slots__ = ("template", "_segments")

    def __init__(self, template: str) -> None:
        if not template.startswith("/"):
            raise ValueError(f"Path template must start with '/': {template!r}")
        self.template = template
        # Each segment is (literal, None, None) or (None, param_name, converter)
        self._segments: list[tuple[str | None, str | None, Callable[[str], Any] | None]] = []
        for part in template.split("/")[1:]:
            m = _PARAM_RE.match(part)
            if m is None:
                self._segments.append((part, None, None))
                continue
            conv_name = m.group("conv") or "str"
            if conv_name not in CONVERTERS:
                raise ValueError(f"Unknown converter '{conv_name}' in {template!r}")
            self._segments.append((None, m.group("name"), CONVERTERS[conv_name]))

    def match(self, path: str) -> dict[str, Any] | None:
        """Return converted path parameters, or None if the path does not fit.

        ``path`` is percent-encoded; segments are decoded after the split.
        """
        raw = path[1:] if path.startswith("/") else path
        parts = [unquote(segment) for segment in raw.split("/")]
        if len(parts) != len(self._segments):
            return None
        params: dict[str, Any] = {}
        for part, (literal, name, converter) in zip(parts, self._segments):
            if name is None:
                if part != literal:
                    return None
                continue
            try:
                params[name] = converter(part)  # type: ignore[misc]
            except ValueError:
                return None
        return params

    def __repr__(self) -> str:
        return f"PathTemplate({self.template!r})"


@dataclass(frozen=True, slots=True)
class QueryParam:
    """Query string matcher: first value of ``key`` converted by ``converter``.

    The converted value reaches the handler as keyword ``name`` (defaults to
    ``key``). A missing key or a ValueError from the converter is a non-match.
    """

    key: str
    converter: Callable[[str], Any] = str
    name: str | None = None

    @property
    def kwarg(self) -> str:
        return self.name or self.key

    def extract(self, query: QueryParams) -> tuple[bool, Any]:
        raw = query.get(self.key)
        if raw is None:
            return False, None
        try:
            return True, self.converter(raw)
        except ValueError:
            return False, None


@dataclass(slots=True)
class Route:
    """A single route: scope type, method, path template, query matchers, handler."""

    scope_type: str
    method: str | None
    path: PathTemplate
    handler: Callable[..., Any]
    query: tuple[QueryParam, ...] = ()
    group: str = ""

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", repr(self.handler))

    def match(
        self, scope_type: str, method: str | None, path: str, query: QueryParams
    ) -> dict[str, Any] | None:
        if scope_type != self.scope_type:
            return None
        if self.method is not None and method != self.method:
            return None
        params = self.path.match(path)
        if params is None:
            return None
        for matcher in self.query:
            ok, value = matcher.extract(query)
            if not ok:
                return None
            params[matcher.kwarg] = value
        return params

    def describe(self) -> str:
        """One-line description: ``GET /int ?val`` or ``WS /wsecho``."""
        verb = self.method if self.scope_type == "http" else "WS"
        line = f"{verb} {self.path.template}"
        if self.query:
            line += " ?" + "&".join(m.key for m in self.query)
        return line


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful Router.match()."""

    route: Route
    params: dict[str, Any] = field(default_factory=dict)


class RouteGroup:
    """Named, ordered collection of routes declared with decorators."""

    __slots__ = ("name", "routes")

    def __init__(self, name: str) -> None:
        self.name = name
        self.routes: list[Route] = []

    def route(
        self,
        method: str,
        path: str,
        query: Iterable[QueryParam] = (),
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an HTTP handler for ``method`` and ``path``."""

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.routes.append(
                Route(
                    scope_type="http",
                    method=method.upper(),
                    path=PathTemplate(path),
                    handler=handler,
                    query=tuple(query),
                    group=self.name,
                )
            )
            return handler

        return decorator

    def get(self, path: str, query: Iterable[QueryParam] = ()) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self.route("GET", path, query)

    def post(self, path: str, query: Iterable[QueryParam] = ()) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self.route("POST", path, query)

    def put(self, path: str, query: Iterable[QueryParam] = ()) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self.route("PUT", path, query)

    def delete(self, path: str, query: Iterable[QueryParam] = ()) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self.route("DELETE", path, query)

    def patch(self, path: str, query: Iterable[QueryParam] = ()) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self.route("PATCH", path, query)

    def websocket(self, path: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a WebSocket handler; it receives a WebSocket, not a request."""

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.routes.append(
                Route(
                    scope_type="websocket",
                    method=None,
                    path=PathTemplate(path),
                    handler=handler,
                    group=self.name,
                )
            )
            return handler

        return decorator

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self.routes)

    def __repr__(self) -> str:
        return f"RouteGroup({self.name!r}, routes={len(self.routes)})"


class Router:
    """Ordered composition of route groups with first-match dispatch."""

    __slots__ = ("groups",)

    def __init__(self) -> None:
        self.groups: list[RouteGroup] = []

    def include(self, *groups: RouteGroup) -> Router:
        """Append groups after the ones already included. Returns self."""
        self.groups.extend(groups)
        return self

    @property
    def routes(self) -> list[Route]:
        return [route for group in self.groups for route in group]

    def match(
        self,
        scope_type: str,
        method: str | None,
        path: str,
        query: QueryParams,
    ) -> RouteMatch | None:
        """Return the first route that accepts the request, or None."""
        for route in self.routes:
            params = route.match(scope_type, method, path, query)
            if params is not None:
                return RouteMatch(route, params)
        return None

    def __repr__(self) -> str:
        return f"Router(groups={[g.name for g in self.groups]!r})"
