# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Path and query parameter routes.

    curl 'localhost:9000/int/42'
    curl 'localhost:9000/int?val=42'

Both routes only match when the value is a 32-bit integer; anything else
falls through to 404.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..request import HttpRequest
from ..routing import QueryParam, RouteGroup, int32

params = RouteGroup("params")


@dataclass(frozen=True, slots=True)
class Number:
    """Integer wrapper decoded from the ``val`` query parameter."""

    n: int

    @classmethod
    def parse(cls, value: str) -> Number:
        return cls(int32(value))


@params.get("/int/{n:int}")
def passed_path(request: HttpRequest, n: int) -> str:
    return f"Passed: {n}"


@params.get("/int", query=[QueryParam("val", Number.parse, name="number")])
def passed_query(request: HttpRequest, number: Number) -> str:
    return f"Passed: {number.n}"
