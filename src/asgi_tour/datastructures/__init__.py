# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Data structures for ASGI applications.

Pythonic wrappers around raw ASGI data::

    ASGI Raw Data                          asgi-tour
    ─────────────────                      ──────────────────
    scope["headers"] = [(b"...", b"...")]  →  Headers (case-insensitive)
    scope["query_string"] = b"a=1&b=2"     →  QueryParams (parsed)
    Cookie: a=1; b=2                       →  parse_cookies() → dict
    scope["raw_path"] = b"/a%2Fb"          →  raw_path_from_scope() → str

Modules
=======
- ``headers``: Case-insensitive HTTP headers
- ``query_params``: Parsed query string parameters
- ``cookies``: Cookie header parsing
- ``paths``: Percent-encoded path for routing
"""

from .cookies import parse_cookies
from .headers import Headers, headers_from_scope
from .paths import raw_path_from_scope
from .query_params import QueryParams, query_params_from_scope

__all__ = [
    "Headers",
    "QueryParams",
    "headers_from_scope",
    "parse_cookies",
    "query_params_from_scope",
    "raw_path_from_scope",
]
