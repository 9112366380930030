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
asgi-tour CLI entry point.

Usage:
    asgi-tour serve                  # Run on 127.0.0.1:9000
    asgi-tour serve --port 9001      # Override port
    asgi-tour routes                 # List composed routes in match order
"""

from __future__ import annotations

import logging
import sys


def cmd_serve(argv: list[str]) -> int:
    """Run the ASGI server."""
    from .server import TourServer

    # Create server - passes argv for SmartOptions parsing
    server = TourServer(argv=argv)

    logging.basicConfig(
        level=server.config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Show startup info
    print("asgi-tour starting...", flush=True)
    print(f"Server: {server.config.url}", flush=True)
    if server.config.debug:
        print("Mode: debug (tracebacks in 500 responses)", flush=True)
    print(flush=True)

    # Run server
    try:
        server.run()
    except KeyboardInterrupt:
        print("\nShutdown.")

    return 0


def cmd_routes(argv: list[str]) -> int:
    """Print the composed routes in match order."""
    from .server import TourServer

    server = TourServer(argv=argv)
    for route in server.router.routes:
        print(f"{route.describe():<24} {route.group}.{route.name}")
    return 0


COMMANDS = {"serve": cmd_serve, "routes": cmd_routes}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    # Handle --version
    if "--version" in args or "-v" in args:
        from . import __version__

        print(f"asgi-tour {__version__}")
        return 0

    # Handle --help
    if "--help" in args or "-h" in args or not args:
        print("Usage: asgi-tour <command> [options]")
        print()
        print("Commands:")
        print("  serve             Run the server")
        print("  routes            List routes in match order")
        print()
        print("Options:")
        print("  --host HOST       Server host (default: 127.0.0.1)")
        print("  --port PORT       Server port (default: 9000)")
        print("  --log_level LVL   Log level (default: info)")
        print("  --debug           Tracebacks in 500 responses")
        print("  --version, -v     Show version")
        print("  --help, -h        Show this help")
        return 0

    subcommand = args[0]
    command = COMMANDS.get(subcommand)
    if command is None:
        print(f"Error: unknown subcommand '{subcommand}'", file=sys.stderr)
        return 1

    return command(args[1:])


if __name__ == "__main__":
    sys.exit(main())
