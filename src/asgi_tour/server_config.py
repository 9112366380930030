# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Server configuration - host, port, logging and middleware switches."""

from __future__ import annotations

from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

__all__ = ["DEFAULTS", "ServerConfig"]

DEFAULTS = {"host": "127.0.0.1", "port": 9000, "log_level": "info", "debug": False}


def _server_opts_spec(
    host: str,
    port: int,
    log_level: str,
    debug: bool,
) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class ServerConfig:
    """Handles server configuration loading."""

    __slots__ = ("_opts", "_middleware")

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
        debug: bool | None = None,
        middleware: dict[str, Any] | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self._opts = self._build_config(
            host=host,
            port=port,
            log_level=log_level,
            debug=debug,
            argv=argv or [],
        )
        self._middleware: dict[str, Any] = dict(middleware or {})

    def _build_config(
        self,
        host: str | None,
        port: int | None,
        log_level: str | None,
        debug: bool | None,
        argv: list[str],
    ) -> SmartOptions:
        """Build server configuration from multiple sources.

        Config precedence (later overrides earlier):
        1. Built-in DEFAULTS
        2. Environment variables: ASGI_TOUR_*
        3. Command line arguments
        4. Explicit constructor parameters
        """
        env_argv_opts = SmartOptions(_server_opts_spec, env="ASGI_TOUR", argv=argv)

        caller_opts = SmartOptions(
            dict(host=host, port=port, log_level=log_level, debug=debug),
            ignore_none=True,
        )

        return SmartOptions(DEFAULTS) + env_argv_opts + caller_opts

    @property
    def server(self) -> SmartOptions:
        """Server options (host, port, log_level, debug)."""
        return self._opts

    @property
    def host(self) -> str:
        return str(self.server["host"])

    @property
    def port(self) -> int:
        return int(self.server["port"])

    @property
    def log_level(self) -> str:
        return str(self.server["log_level"] or "info").lower()

    @property
    def debug(self) -> bool:
        return bool(self.server["debug"])

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def middleware(self) -> dict[str, Any]:
        """Middleware on/off switches, e.g. {"logging": "off"}."""
        return dict(self._middleware)

    def middleware_options(self) -> dict[str, dict[str, Any]]:
        """Per-middleware constructor kwargs derived from server options."""
        return {"errors": {"debug": self.debug}}
