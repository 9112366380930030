# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Cookie header parsing.

The read side of cookies: ``parse_cookies`` turns the request ``Cookie``
header(s) into an ordered name-value dict. The write side lives in
``asgi_tour.response.make_cookie``.

Parsing rules::

    "a=1; b=two; junk; c="  →  {"a": "1", "b": "two", "c": ""}

- Pairs are separated by ``;`` and stripped
- Pairs without ``=`` are ignored
- Values wrapped in double quotes are unquoted
- A repeated name keeps its last value
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["parse_cookies"]


def parse_cookies(header: str | Iterable[str] | None) -> dict[str, str]:
    """Parse ``Cookie`` header value(s) into a name-value dict.

    Accepts a single header value or every value of a repeated header.
    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    values = [header] if isinstance(header, str) else list(header)
    cookies: dict[str, str] = {}
    for value in values:
        for pair in value.split(";"):
            pair = pair.strip()
            if "=" not in pair:
                continue
            key, _, content = pair.partition("=")
            content = content.strip()
            if len(content) >= 2 and content[0] == content[-1] == '"':
                content = content[1:-1]
            cookies[key.strip()] = content
    return cookies
