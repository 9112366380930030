# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Greeting routes.

    curl 'localhost:9000/hello/world'
    curl -XPOST 'localhost:9000/hello' -d 'world'
"""

from __future__ import annotations

from ..decoders import text_decoder
from ..request import HttpRequest
from ..routing import RouteGroup

hello = RouteGroup("hello")


@hello.get("/hello/{name}")
def greet(request: HttpRequest, name: str) -> str:
    return f"Hello {name}!"


@hello.post("/hello")
def greet_body(request: HttpRequest) -> str:
    name = request.decode(text_decoder)
    return f"Hello {name}!"
