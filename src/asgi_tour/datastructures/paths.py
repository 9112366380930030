# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Percent-encoded request path, for routing segment by segment."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from ..types import Scope

__all__ = ["raw_path_from_scope"]


def raw_path_from_scope(scope: Scope) -> str:
    """Return the path as sent on the wire, without the query string.

    ``scope["path"]`` is already percent-decoded, so ``/hello/a%2Fb`` and
    ``/hello/a/b`` look the same there. ``raw_path`` keeps them apart.
    Servers that omit ``raw_path`` get the decoded path re-quoted.
    """
    raw = scope.get("raw_path")
    if raw:
        return raw.decode("latin-1").partition("?")[0]
    return quote(str(scope.get("path", "/")))
