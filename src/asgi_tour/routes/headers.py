# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Header and cookie inspection routes.

    curl -v 'localhost:9000/headers' -H 'Request-Header: request value'
    curl -v 'localhost:9000/cookies' -b 'request-cookie=request_value'
"""

from __future__ import annotations

from ..request import HttpRequest
from ..routing import RouteGroup

headers = RouteGroup("headers")


@headers.get("/headers")
def list_headers(request: HttpRequest) -> str:
    """Echo request headers as ``Name: value`` lines, in arrival order."""
    request.response.set_header("Response-Header", "response value")
    return "\n".join(f"{name}: {value}" for name, value in request.headers.items())


@headers.get("/cookies")
def list_cookies(request: HttpRequest) -> str:
    request.response.set_cookie("response-cookie", "response_value")
    return "\n".join(f"{name}: {value}" for name, value in request.cookies.items())
