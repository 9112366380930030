# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Query string access for route matchers.

``QueryParam("val", ...)`` in ``asgi_tour.routing`` only ever asks two
things of the query string: is ``val`` there, and what is its first value.
``QueryParams`` answers both. Keys are case-sensitive and ``?val=`` counts
as present with an empty value, which the integer converter then rejects::

    params = QueryParams(b"val=42&val=7&flag=")
    params.get("val")        # "42"
    params.getlist("val")    # ["42", "7"]
    "flag" in params         # True
    params.get("flag")       # ""
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

__all__ = ["QueryParams", "query_params_from_scope"]


class QueryParams:
    """Parsed query string; values are percent-decoded."""

    __slots__ = ("_values",)

    def __init__(self, query_string: bytes | str) -> None:
        text = query_string.decode("latin-1") if isinstance(query_string, bytes) else query_string
        self._values: dict[str, list[str]] = parse_qs(text, keep_blank_values=True)

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value of ``key``, or ``default`` when the key is absent."""
        values = self._values.get(key)
        return values[0] if values else default

    def getlist(self, key: str) -> list[str]:
        return list(self._values.get(key, ()))

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({self._values!r})"


def query_params_from_scope(scope: Mapping[str, Any]) -> QueryParams:
    return QueryParams(scope.get("query_string", b""))
