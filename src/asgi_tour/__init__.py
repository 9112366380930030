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

"""asgi-tour - a guided tour of HTTP routing on a minimal ASGI framework.

Main components:
    TourServer: ASGI entry point, composes route groups, runs uvicorn
    Router / RouteGroup: ordered first-match routing with typed segments
    HttpRequest: HTTP request wrapper with headers, query, cookies, body
    Response: HTTP response with auto content-type detection
    WebSocket: WebSocket connection wrapper

Decoders:
    text_decoder, JsonDecoder, multipart_decoder, decode_by

Middleware:
    ErrorMiddleware: Exception handling and error responses
    LoggingMiddleware: Access logging

Usage:
    from asgi_tour import TourServer

    server = TourServer()
    server.run()  # Starts uvicorn on 127.0.0.1:9000
"""

__version__ = "0.1.0"

from .datastructures import (
    Headers,
    QueryParams,
    headers_from_scope,
    parse_cookies,
    query_params_from_scope,
)
from .decoders import (
    EntityDecoder,
    JsonDecoder,
    decode_by,
    multipart_decoder,
    text_decoder,
)
from .dispatcher import Dispatcher
from .exceptions import (
    HTTPException,
    HTTPNotFound,
    InvalidMessageBody,
    MalformedMessageBody,
    MediaTypeMismatch,
    MessageBodyFailure,
    WebSocketDisconnect,
)
from .lifespan import ServerLifespan
from .multipart import Part, parse_multipart
from .request import HttpRequest
from .response import Response, make_cookie
from .routing import QueryParam, Route, RouteGroup, RouteMatch, Router
from .server import TourServer
from .server_config import ServerConfig
from .types import ASGIApp, Message, Receive, Scope, Send
from .websocket import WebSocket, WebSocketState

__all__ = [
    # Request / response
    "HttpRequest",
    "Response",
    "make_cookie",
    # Data structures
    "Headers",
    "QueryParams",
    "headers_from_scope",
    "parse_cookies",
    "query_params_from_scope",
    # Decoders
    "EntityDecoder",
    "JsonDecoder",
    "Part",
    "decode_by",
    "multipart_decoder",
    "parse_multipart",
    "text_decoder",
    # Exceptions
    "HTTPException",
    "HTTPNotFound",
    "InvalidMessageBody",
    "MalformedMessageBody",
    "MediaTypeMismatch",
    "MessageBodyFailure",
    "WebSocketDisconnect",
    # Routing
    "QueryParam",
    "Route",
    "RouteGroup",
    "RouteMatch",
    "Router",
    # ASGI types
    "ASGIApp",
    "Message",
    "Receive",
    "Scope",
    "Send",
    # Server
    "Dispatcher",
    "ServerConfig",
    "ServerLifespan",
    "TourServer",
    # WebSocket
    "WebSocket",
    "WebSocketState",
]
