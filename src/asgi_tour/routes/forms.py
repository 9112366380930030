# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Multipart body route.

    curl -XPOST 'localhost:9000/multipart' -F 'text=request value' -F file=@file.txt
"""

from __future__ import annotations

from ..decoders import multipart_decoder
from ..request import HttpRequest
from ..routing import RouteGroup

forms = RouteGroup("forms")


@forms.post("/multipart")
def part_names(request: HttpRequest) -> str:
    """List part names one per line; unnamed parts give an empty line."""
    parts = request.decode(multipart_decoder)
    return "\n".join(part.name or "" for part in parts)
