# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for asgi-tour HTTP and WebSocket error handling.

Handlers and entity decoders raise these; ErrorMiddleware converts them
into HTTP responses. Handlers never build error responses by hand.

Module Structure
----------------
HTTPException
    Base for every HTTP error response (4xx, 5xx). HTTPNotFound is the
    status-specific subclass raised when no route matches.

MessageBodyFailure
    Base for request body decoding failures. Each failure maps to the
    status that best describes it:

    ====================  ======  ========================================
    Exception             Status  Raised when
    ====================  ======  ========================================
    MalformedMessageBody  400     body cannot be parsed (bad JSON, broken
                                  multipart stream)
    MediaTypeMismatch     415     strict decoding and Content-Type is not
                                  one the decoder accepts
    InvalidMessageBody    422     body parses but has the wrong shape
    ====================  ======  ========================================

WebSocketDisconnect
    Signal that the client closed the WebSocket. Not an error.

Example:
    >>> raise HTTPNotFound()
    >>> raise InvalidMessageBody("Invalid value: [world]")
    >>> raise HTTPException(400, headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
"""


class HTTPException(Exception):
    """An HTTP answer raised from inside a handler or decoder.

    ``detail`` becomes the plain-text body. ``headers`` accepts a dict or a
    list of pairs and is stored as a list, so a name may repeat.
    """

    def __init__(
        self,
        status_code: int,
        detail: str = "",
        headers: dict[str, str] | list[tuple[str, str]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.headers: list[tuple[str, str]] | None = None
        if headers is not None:
            self.headers = list(headers.items()) if isinstance(headers, dict) else list(headers)
        super().__init__(detail)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, detail={self.detail!r})"


class HTTPNotFound(HTTPException):
    """No route accepted the request."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(404, detail=detail)


class MessageBodyFailure(HTTPException):
    """Base class for request body decoding failures."""


class MalformedMessageBody(MessageBodyFailure):
    """The body could not be parsed at all (400)."""

    def __init__(self, detail: str) -> None:
        super().__init__(400, detail=f"Malformed message body: {detail}")


class InvalidMessageBody(MessageBodyFailure):
    """The body parsed but did not have the expected shape (422)."""

    def __init__(self, detail: str) -> None:
        super().__init__(422, detail=detail)


class MediaTypeMismatch(MessageBodyFailure):
    """Strict decoding rejected the request Content-Type (415)."""

    def __init__(self, received: str | None, expected: list[str]) -> None:
        self.received = received
        self.expected = expected
        detail = (
            f"Media type {received or '(none)'} is not supported, "
            f"expected one of: {', '.join(expected)}"
        )
        super().__init__(415, detail=detail)


class WebSocketDisconnect(Exception):
    """The client closed the WebSocket; ``code`` and ``reason`` come from its close frame."""

    def __init__(self, code: int = 1000, reason: str = "") -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"WebSocket disconnected with code {code}")

    def __repr__(self) -> str:
        return f"WebSocketDisconnect(code={self.code}, reason={self.reason!r})"
