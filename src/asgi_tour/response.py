# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
The answer to one tour request.

Every ``HttpRequest`` owns a ``Response`` from the start. Route handlers put
headers and cookies on it and return a plain value; the dispatcher turns
that value into the body::

    @headers.get("/cookies")
    def cookies(request):
        request.response.set_cookie("response-cookie", "response_value")
        return "request-cookie: ..."         # str -> text/plain

    # dispatcher
    request.response.set_result(result)
    await request.response(scope, receive, send)

Body encoding by result type:

    ============ ============================ ======================
    result       body                         content-type
    ============ ============================ ======================
    str          UTF-8                        text/plain; charset=utf-8
    dict, list   orjson                       application/json
    bytes        as is                        application/octet-stream
    None         empty                        text/plain; charset=utf-8
    ============ ============================ ======================

``content-type`` and ``content-length`` are derived from the body when the
headers are read, so calling ``set_result`` twice never duplicates them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import orjson

from .types import Receive, Scope, Send

__all__ = ["Response", "make_cookie"]

HeadersInput = Mapping[str, str] | list[tuple[str, str]] | None

_CONTENT_HEADERS = ("content-type", "content-length")


class Response:
    """ASGI callable sending a status line, headers and one body message."""

    __slots__ = ("body", "status_code", "media_type", "_extra", "request")

    charset = "utf-8"

    def __init__(
        self,
        content: bytes | str | None = None,
        status_code: int = 200,
        headers: HeadersInput = None,
        media_type: str | None = None,
        request: Any = None,
    ) -> None:
        self.request = request
        self.status_code = status_code
        self.media_type = media_type
        if headers is None:
            self._extra: list[tuple[str, str]] = []
        elif isinstance(headers, Mapping):
            self._extra = list(headers.items())
        else:
            self._extra = list(headers)
        if isinstance(content, str):
            content = content.encode(self.charset)
        self.body: bytes = content or b""

    @property
    def headers(self) -> list[tuple[str, str]]:
        """Headers in sending order; explicit content headers win over derived ones."""
        result = list(self._extra)
        given = {name.lower() for name, _ in result}
        if "content-type" not in given and self.media_type is not None:
            content_type = self.media_type
            if content_type.startswith("text/") and "charset" not in content_type:
                content_type += f"; charset={self.charset}"
            result.append(("content-type", content_type))
        if "content-length" not in given:
            result.append(("content-length", str(len(self.body))))
        return result

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        raw = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in self.headers]
        await send({"type": "http.response.start", "status": self.status_code, "headers": raw})
        await send({"type": "http.response.body", "body": self.body})

    def set_header(self, name: str, value: str) -> None:
        self._extra.append((name, value))

    def set_cookie(self, key: str, value: str = "") -> None:
        self._extra.append(make_cookie(key, value))

    def set_result(self, result: Any) -> None:
        """Encode a handler's return value as the body (see module table)."""
        if isinstance(result, (dict, list)):
            body, media_type = orjson.dumps(result), "application/json"
        elif isinstance(result, bytes):
            body, media_type = result, "application/octet-stream"
        elif result is None:
            body, media_type = b"", "text/plain"
        else:
            body, media_type = str(result).encode(self.charset), "text/plain"
        self.body = body
        self.media_type = self.media_type or media_type
        # a result replaces whatever content headers a previous one implied
        self._extra = [(n, v) for n, v in self._extra if n.lower() not in _CONTENT_HEADERS]


def make_cookie(key: str, value: str = "") -> tuple[str, str]:
    """``("set-cookie", "key=value")`` with the value percent-encoded.

    >>> make_cookie("response-cookie", "response_value")
    ('set-cookie', 'response-cookie=response_value')
    """
    return ("set-cookie", f"{key}={quote(value, safe='')}")
