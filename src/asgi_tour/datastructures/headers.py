# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Request headers as the tour routes see them.

ASGI hands headers over as ``[(b"name", b"value"), ...]``. ``Headers`` keeps
that list in arrival order, decoded as Latin-1, so ``GET /headers`` can echo
it back line by line. Lookups by name ignore case::

    headers = Headers([(b"Host", b"localhost:9000"), (b"Cookie", b"a=1"), (b"cookie", b"b=2")])
    headers.get("host")          # "localhost:9000"
    headers.getlist("COOKIE")    # ["a=1", "b=2"]
    headers.items()              # [("Host", "localhost:9000"), ("Cookie", "a=1"), ("cookie", "b=2")]
"""

from collections.abc import Mapping
from typing import Any

__all__ = ["Headers", "headers_from_scope"]


class Headers:
    """Read-only header list with case-insensitive lookup."""

    __slots__ = ("_pairs",)

    def __init__(self, raw_headers: list[tuple[bytes, bytes]]) -> None:
        self._pairs = [(name.decode("latin-1"), value.decode("latin-1")) for name, value in raw_headers]

    def getlist(self, key: str) -> list[str]:
        """Every value sent under ``key``, in arrival order."""
        wanted = key.lower()
        return [value for name, value in self._pairs if name.lower() == wanted]

    def get(self, key: str, default: str | None = None) -> str | None:
        found = self.getlist(key)
        return found[0] if found else default

    def items(self) -> list[tuple[str, str]]:
        """Pairs exactly as received: original casing, duplicates kept."""
        return list(self._pairs)

    def __getitem__(self, key: str) -> str:
        found = self.getlist(key)
        if not found:
            raise KeyError(key)
        return found[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self.getlist(key))

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"Headers({self._pairs!r})"


def headers_from_scope(scope: Mapping[str, Any]) -> Headers:
    return Headers(scope.get("headers", []))
