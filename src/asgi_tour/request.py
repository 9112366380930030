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
HTTP request adapter over an ASGI scope.

Lifecycle:
    request = HttpRequest()
    await request.init(scope, receive)   # reads the whole body
    request.path_params = {...}          # set by the dispatcher after routing
    result = handler(request, **params)

Once ``init()`` has run every accessor is synchronous, so route handlers
can be plain functions. Body decoding goes through entity decoders::

    hello = request.decode(HelloDecoder)              # lenient (default)
    hello = request.decode(HelloDecoder, strict=True) # checks Content-Type

Every request carries an ``id``: the client's ``X-Request-ID`` header when
present, a fresh uuid4 otherwise.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, Any, TypeVar

import orjson

from .datastructures import (
    Headers,
    QueryParams,
    headers_from_scope,
    parse_cookies,
    query_params_from_scope,
    raw_path_from_scope,
)
from .exceptions import MalformedMessageBody
from .response import Response
from .types import Receive, Scope

if TYPE_CHECKING:
    from .decoders import EntityDecoder

__all__ = ["HttpRequest"]

T = TypeVar("T")


class HttpRequest:
    """One tour request; ``init()`` has read the body, everything else is parsed on first use."""

    __slots__ = (
        "_scope",
        "_body",
        "_headers",
        "_query",
        "_cookies",
        "_id",
        "_created_at",
        "path_params",
        "response",
    )

    def __init__(self) -> None:
        # Populated by init()
        self._scope: Scope = {}
        self._body: bytes = b""
        self._headers: Headers | None = None
        self._query: QueryParams | None = None
        self._cookies: dict[str, str] | None = None
        self._id: str = ""
        self._created_at: float = time.time()
        self.path_params: dict[str, Any] = {}
        self.response: Response = Response(request=self)

    async def init(self, scope: Scope, receive: Receive) -> None:
        """Async initialization - reads the body from ``http.request`` messages."""
        if scope.get("type") != "http":
            raise ValueError(f"Expected scope type 'http', got '{scope.get('type')}'")
        self._scope = scope

        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        self._body = b"".join(chunks)

        self._id = self.headers.get("x-request-id") or str(uuid.uuid4())

    @property
    def id(self) -> str:
        """Correlation ID for log lines."""
        return self._id

    @property
    def age(self) -> float:
        """Seconds spent on this request so far, for the dispatcher's timing line."""
        return time.time() - self._created_at

    @property
    def scope(self) -> Scope:
        """The ASGI scope the request was initialised from."""
        return self._scope

    @property
    def method(self) -> str:
        return str(self._scope.get("method", "GET")).upper()

    @property
    def path(self) -> str:
        """Percent-decoded request path (as provided by the ASGI server)."""
        return str(self._scope.get("path", "/"))

    @property
    def raw_path(self) -> str:
        """Path still percent-encoded; the router splits it before decoding."""
        return raw_path_from_scope(self._scope)

    @property
    def headers(self) -> Headers:
        """Request headers (case-insensitive lookup, original order)."""
        if self._headers is None:
            self._headers = headers_from_scope(self._scope)
        return self._headers

    @property
    def query_params(self) -> QueryParams:
        """Parsed query string, read by the routes' query matchers."""
        if self._query is None:
            self._query = query_params_from_scope(self._scope)
        return self._query

    @property
    def cookies(self) -> dict[str, str]:
        """Request cookies from every ``Cookie`` header, in order."""
        if self._cookies is None:
            self._cookies = parse_cookies(self.headers.getlist("cookie"))
        return self._cookies

    @property
    def content_type(self) -> str | None:
        """Full Content-Type, parameters included (``text/plain; charset=utf-8``)."""
        return self.headers.get("content-type")

    @property
    def media_type(self) -> str | None:
        """Content-Type without parameters, lowercased (``text/plain``)."""
        content_type = self.content_type
        if not content_type:
            return None
        return content_type.split(";", 1)[0].strip().lower()

    @property
    def body(self) -> bytes:
        """Body bytes as received, all chunks joined."""
        return self._body

    def text(self) -> str:
        """Body decoded as UTF-8; undecodable bytes are replaced."""
        return self._body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Body parsed as JSON.

        Raises:
            MalformedMessageBody: If the body is not valid JSON.
        """
        try:
            return orjson.loads(self._body)
        except orjson.JSONDecodeError as e:
            raise MalformedMessageBody(f"Invalid JSON: {e}") from e

    def decode(self, decoder: EntityDecoder[T], strict: bool = False) -> T:
        """Decode the body with an entity decoder.

        Args:
            decoder: The decoder to apply.
            strict: When True, reject bodies whose Content-Type the decoder
                does not accept.
        """
        return decoder.decode(self, strict=strict)

    def __repr__(self) -> str:
        return f"<HttpRequest id={self._id!r} method={self.method} path={self.path!r}>"
