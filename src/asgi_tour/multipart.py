# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Multipart body parsing on top of python-multipart.

``parse_multipart(body, content_type)`` walks a ``multipart/*`` body and
returns its parts in order. The boundary comes from the Content-Type
header; each part's name and filename come from its Content-Disposition.

Failure mapping:
    - no boundary parameter          → InvalidMessageBody (422)
    - parser rejects the byte stream → MalformedMessageBody (400)
    - stream ends before the closing → MalformedMessageBody (400)
      boundary

Example::

    parts = parse_multipart(body, 'multipart/form-data; boundary=XyZ')
    [part.name for part in parts]   # ["text", "file"]
"""

from __future__ import annotations

from dataclasses import dataclass, field

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from .exceptions import InvalidMessageBody, MalformedMessageBody

__all__ = ["Part", "parse_multipart"]


@dataclass(slots=True)
class Part:
    """One part of a multipart body."""

    name: str | None = None
    filename: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    data: bytes = b""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "text/plain")

    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


def parse_multipart(body: bytes, content_type: str | None) -> list[Part]:
    """Split a multipart body into its parts.

    Raises:
        InvalidMessageBody: If the Content-Type carries no boundary.
        MalformedMessageBody: If the body is not a valid multipart stream.
    """
    _, options = parse_options_header((content_type or "").encode("latin-1"))
    boundary = options.get(b"boundary")
    if not boundary:
        raise InvalidMessageBody("Missing boundary extension to Content-Type")

    parts: list[Part] = []
    current = Part()
    data = bytearray()
    header_field = bytearray()
    header_value = bytearray()
    open_part = False

    def on_part_begin() -> None:
        nonlocal current, data, open_part
        current = Part()
        data = bytearray()
        open_part = True

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        data.extend(chunk[start:end])

    def on_part_end() -> None:
        nonlocal open_part
        current.data = bytes(data)
        parts.append(current)
        open_part = False

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        header_field.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        name = header_field.decode("latin-1").strip().lower()
        value = header_value.decode("latin-1").strip()
        header_field.clear()
        header_value.clear()
        current.headers[name] = value
        if name == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            if b"name" in params:
                current.name = params[b"name"].decode("utf-8")
            if b"filename" in params:
                current.filename = params[b"filename"].decode("utf-8")

    parser = MultipartParser(
        boundary,
        {
            "on_part_begin": on_part_begin,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
        },
    )
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as e:
        raise MalformedMessageBody(f"Invalid multipart body: {e}") from e
    # finalize() does not complain about a stream cut off before "--boundary--"
    if open_part or b"--" + boundary + b"--" not in body:
        raise MalformedMessageBody("Invalid multipart body: closing boundary missing")
    return parts
