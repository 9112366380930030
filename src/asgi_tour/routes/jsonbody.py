# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""JSON entity decoding into a dataclass.

    curl -XPOST 'localhost:9000/json' -d '{"name": "world"}' -H 'Content-Type: application/json'
"""

from __future__ import annotations

from dataclasses import dataclass

from ..decoders import JsonDecoder
from ..request import HttpRequest
from ..routing import RouteGroup

jsonbody = RouteGroup("jsonbody")


@dataclass(frozen=True, slots=True)
class Hello:
    name: str


hello_json = JsonDecoder(Hello)


@jsonbody.post("/json")
def greet_json(request: HttpRequest) -> str:
    hello = request.decode(hello_json)
    return f"Hello {hello.name}!"
