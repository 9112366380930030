# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for asgi_tour.exceptions."""

import pytest

from asgi_tour.exceptions import (
    HTTPException,
    HTTPNotFound,
    InvalidMessageBody,
    MalformedMessageBody,
    MediaTypeMismatch,
    MessageBodyFailure,
    WebSocketDisconnect,
)


class TestHTTPException:
    def test_attributes(self) -> None:
        exc = HTTPException(418, detail="teapot")
        assert exc.status_code == 418
        assert exc.detail == "teapot"
        assert exc.headers is None
        assert str(exc) == "teapot"

    def test_dict_headers_normalized_to_list(self) -> None:
        exc = HTTPException(405, headers={"Allow": "GET"})
        assert exc.headers == [("Allow", "GET")]

    def test_list_headers_keep_duplicates(self) -> None:
        exc = HTTPException(400, headers=[("X-A", "1"), ("X-A", "2")])
        assert exc.headers == [("X-A", "1"), ("X-A", "2")]

    def test_repr_uses_class_name(self) -> None:
        assert repr(HTTPNotFound()) == "HTTPNotFound(status_code=404, detail='Not found')"

    def test_can_be_raised(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            raise HTTPNotFound()
        assert exc_info.value.status_code == 404


class TestMessageBodyFailures:
    def test_malformed_is_400(self) -> None:
        exc = MalformedMessageBody("Invalid JSON: unexpected character")
        assert isinstance(exc, MessageBodyFailure)
        assert exc.status_code == 400
        assert exc.detail == "Malformed message body: Invalid JSON: unexpected character"

    def test_invalid_is_422(self) -> None:
        exc = InvalidMessageBody("Invalid value: world")
        assert isinstance(exc, HTTPException)
        assert exc.status_code == 422
        assert exc.detail == "Invalid value: world"

    def test_media_type_mismatch_is_415(self) -> None:
        exc = MediaTypeMismatch("application/xml", ["text/plain"])
        assert exc.status_code == 415
        assert exc.received == "application/xml"
        assert exc.detail == (
            "Media type application/xml is not supported, expected one of: text/plain"
        )

    def test_media_type_mismatch_without_content_type(self) -> None:
        exc = MediaTypeMismatch(None, ["application/json", "application/*+json"])
        assert "(none)" in exc.detail
        assert "application/json, application/*+json" in exc.detail


class TestWebSocketDisconnect:
    def test_defaults(self) -> None:
        exc = WebSocketDisconnect()
        assert exc.code == 1000
        assert exc.reason == ""
        assert not isinstance(exc, HTTPException)

    def test_repr(self) -> None:
        assert repr(WebSocketDisconnect(1001, "going away")) == (
            "WebSocketDisconnect(code=1001, reason='going away')"
        )
