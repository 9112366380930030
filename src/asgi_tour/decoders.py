# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Entity decoders - turn a request body into a value.

An ``EntityDecoder`` pairs the media ranges it understands with a function
of the request. ``HttpRequest.decode()`` applies it::

    @decode_by("text/plain")
    def hello_decoder(request: HttpRequest) -> Hello:
        ...

    hello = request.decode(hello_decoder)

Decoding is lenient by default: the Content-Type is not looked at, so
``curl -d`` (which sends ``application/x-www-form-urlencoded``) still
reaches the decode function. ``strict=True`` raises ``MediaTypeMismatch``
(415) when the request media type is not in the decoder's ranges.

Built-in decoders:
    text_decoder        text/*            body as str
    JsonDecoder(model)  application/json  body into a dataclass
    multipart_decoder   multipart/*       list of Part

Failures are raised as MessageBodyFailure subclasses and rendered by
ErrorMiddleware.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import InvalidMessageBody, MediaTypeMismatch
from .multipart import Part, parse_multipart

if TYPE_CHECKING:
    from .request import HttpRequest

__all__ = [
    "EntityDecoder",
    "JsonDecoder",
    "decode_by",
    "media_range_matches",
    "multipart_decoder",
    "text_decoder",
]

T = TypeVar("T")


def media_range_matches(media_range: str, media_type: str | None) -> bool:
    """Check a media type (``text/plain``) against a range (``text/*``, ``*/*``)."""
    if media_type is None:
        return False
    range_main, _, range_sub = media_range.lower().partition("/")
    main, _, sub = media_type.lower().partition("/")
    if range_main == "*":
        return True
    if range_main != main:
        return False
    if range_sub.startswith("*+"):
        # structured syntax suffix: application/*+json matches application/problem+json
        return sub.endswith(range_sub[1:])
    return range_sub == "*" or range_sub == sub


class EntityDecoder(Generic[T]):
    """Decoder for request bodies of the given media ranges."""

    __slots__ = ("media_ranges", "_func")

    def __init__(self, media_ranges: tuple[str, ...], func: Callable[[HttpRequest], T]) -> None:
        self.media_ranges = media_ranges
        self._func = func

    def matches(self, media_type: str | None) -> bool:
        return any(media_range_matches(r, media_type) for r in self.media_ranges)

    def decode(self, request: HttpRequest, strict: bool = False) -> T:
        if strict and not self.matches(request.media_type):
            raise MediaTypeMismatch(request.media_type, list(self.media_ranges))
        return self._func(request)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(self.media_ranges)})"


def decode_by(*media_ranges: str) -> Callable[[Callable[[HttpRequest], T]], EntityDecoder[T]]:
    """Decorator: build an EntityDecoder from a function of the request."""

    def wrap(func: Callable[[HttpRequest], T]) -> EntityDecoder[T]:
        return EntityDecoder(media_ranges, func)

    return wrap


@decode_by("text/*")
def text_decoder(request: HttpRequest) -> str:
    return request.text()


@decode_by("multipart/*")
def multipart_decoder(request: HttpRequest) -> list[Part]:
    return parse_multipart(request.body, request.content_type)


# Primitive field types checked by JsonDecoder; anything else is passed through
_JSON_CHECKS: dict[Any, Callable[[Any], bool]] = {
    str: lambda v: isinstance(v, str),
    int: lambda v: isinstance(v, int) and not isinstance(v, bool),
    float: lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    bool: lambda v: isinstance(v, bool),
}


class JsonDecoder(EntityDecoder[T]):
    """Decode a JSON object body into a dataclass.

    Each dataclass field without a default must be present. Fields typed
    str, int, float or bool must hold a JSON value of that type. Unknown
    keys are ignored.

    Example:
        >>> @dataclass
        ... class Hello:
        ...     name: str
        >>> request.decode(JsonDecoder(Hello))
        Hello(name='world')

    Raises:
        MalformedMessageBody: Body is not JSON (400).
        InvalidMessageBody: JSON does not fit the dataclass (422).
    """

    __slots__ = ("model",)

    def __init__(self, model: type[T]) -> None:
        if not dataclasses.is_dataclass(model):
            raise TypeError(f"JsonDecoder needs a dataclass, got {model!r}")
        self.model = model
        super().__init__(("application/json", "application/*+json"), self._decode_model)

    def _decode_model(self, request: HttpRequest) -> T:
        data = request.json()
        if not isinstance(data, dict):
            raise InvalidMessageBody(
                f"Could not decode JSON: expected an object for {self.model.__name__}"
            )
        hints = typing.get_type_hints(self.model)
        kwargs: dict[str, Any] = {}
        for fld in dataclasses.fields(self.model):  # type: ignore[arg-type]
            if fld.name not in data:
                if fld.default is dataclasses.MISSING and fld.default_factory is dataclasses.MISSING:
                    raise InvalidMessageBody(
                        f"Could not decode JSON: missing required field '{fld.name}'"
                    )
                continue
            value = data[fld.name]
            check = _JSON_CHECKS.get(hints.get(fld.name))
            if check is not None and not check(value):
                raise InvalidMessageBody(
                    f"Could not decode JSON: field '{fld.name}' "
                    f"must be {hints[fld.name].__name__}"
                )
            kwargs[fld.name] = value
        return self.model(**kwargs)
