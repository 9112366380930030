# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Plain-text entity decoding with a custom decoder.

    curl -XPOST 'localhost:9000/entity' -d '(world)'

The body must be a name in round brackets; anything else is answered
422 ``Invalid value: <body>``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..decoders import decode_by
from ..exceptions import InvalidMessageBody
from ..request import HttpRequest
from ..routing import RouteGroup

entity = RouteGroup("entity")

# Line terminators never match inside the brackets: \n \r \x85 \u2028 \u2029
NAME_RE = re.compile(r"\(([^\n\r\x85\u2028\u2029]*)\)")


@dataclass(frozen=True, slots=True)
class Hello:
    name: str


@decode_by("text/plain")
def hello_decoder(request: HttpRequest) -> Hello:
    body = request.text()
    m = NAME_RE.fullmatch(body)
    if m is None:
        raise InvalidMessageBody(f"Invalid value: {body}")
    return Hello(m.group(1))


@entity.post("/entity")
def greet_entity(request: HttpRequest) -> str:
    hello = request.decode(hello_decoder)
    return f"Hello {hello.name}!"
