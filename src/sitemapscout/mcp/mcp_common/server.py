"""
Server lifecycle for the sitemap-scout MCP server.

``BaseMCPServer`` owns the FastMCP instance, the services object shared by
all tools, the /health route and the server://info resource. The
module-level helpers build the argument parser and run the chosen transport.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from functools import partial
from typing import Any, Literal, TypeAlias

import anyio
from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

TransportType: TypeAlias = Literal["stdio", "http"]


def create_middleware(
    allowed_origins: list[str],
    allowed_hosts: list[str],
) -> list[Middleware]:
    """
    Create middleware stack for HTTP transport.

    Args:
        allowed_origins: List of allowed CORS origins (or ["*"] for all)
        allowed_hosts: List of allowed host headers (or ["*"] for all)

    Returns:
        List of middleware instances
    """
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials="*" not in allowed_origins,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["mcp-session-id"],
        ),
        Middleware(
            TrustedHostMiddleware,
            allowed_hosts=allowed_hosts,
        ),
    ]


async def setup_transport(
    mcp: FastMCP,
    transport: TransportType = "http",
    host: str = "0.0.0.0",
    port: int = 8080,
    path: str = "/mcp",
    allowed_origins: list[str] | None = None,
    allowed_hosts: list[str] | None = None,
) -> None:
    """
    Serve ``mcp`` until the transport closes.

    stdio takes no options. Streamable HTTP binds ``host:port`` at ``path``
    behind the CORS and trusted-host middleware; an empty origin or host list
    means "allow all".

    Raises:
        ValueError: If the transport is not supported.
    """
    logger = logging.getLogger(__name__)
    run_kwargs: dict[str, Any] = {}

    if transport == "stdio":
        logger.info("Starting MCP server via stdio...")
    elif transport == "http":
        middleware = create_middleware(allowed_origins or ["*"], allowed_hosts or ["*"])
        run_kwargs = {
            "host": host,
            "port": port,
            "path": path,
            "middleware": middleware,
        }
        logger.info("Starting MCP server via http on %s:%d%s...", host, port, path)
        logger.info("Health check: http://%s:%d/health", host, port)
    else:
        raise ValueError(f"Unsupported transport: {transport}")

    await mcp.run_async(transport=transport, **run_kwargs)


def create_argument_parser(
    description: str,
    default_transport: TransportType = "http",
    default_port: int = 8080,
) -> argparse.ArgumentParser:
    """
    Create the argument parser for the server entry point.

    Args:
        description: Server description for argument parser
        default_transport: Default transport type (default: "http")
        default_port: Default HTTP port (default: 8080)

    Returns:
        Configured ArgumentParser instance

    Examples:
        >>> parser = create_argument_parser("My MCP Server")
        >>> args = parser.parse_args(["--stdio"])
        >>> args.transport
        'stdio'
    """
    parser = argparse.ArgumentParser(description=description)

    parser.add_argument(
        "--transport",
        type=str,
        default=default_transport,
        choices=["stdio", "http"],
        help=f"MCP transport protocol (stdio or http). Default: {default_transport}.",
    )
    parser.add_argument(
        "--stdio",
        "-s",
        dest="transport",
        action="store_const",
        const="stdio",
        help="Shorthand for --transport stdio.",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host for HTTP transport. Default: 0.0.0.0.",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=default_port,
        help=f"Port for HTTP transport. Default: {default_port} (PORT environment variable).",
    )
    parser.add_argument(
        "--path",
        type=str,
        default="/mcp",
        help="Path for HTTP transport (default: /mcp)",
    )

    return parser


class BaseMCPServer:
    """
    Base class for MCP servers with unified lifecycle management.

    Provides:
    - Services initialisation with a connection self-test
    - An HTTP ``/health`` route and a ``server://info`` resource
    - Transport setup with CORS and trusted-host middleware
    - Cleanup handling and a standard ``main()`` entry point

    Subclasses MUST implement ``create_api_client()`` and ``register_tools()``.
    Subclasses MAY override ``cleanup()``, ``get_allowed_origins()`` and
    ``get_allowed_hosts()``.
    """

    # Subclasses should override with their own
    logger: logging.Logger

    def __init__(
        self,
        server_name: str,
        server_version: str,
        instructions: str | None = None,
    ):
        """
        Initialise base server.

        Args:
            server_name: Name of the server (e.g., "sitemap-scout")
            server_version: Server package version
            instructions: Instructions for LLMs on when/how to use this server's tools
        """
        self.server_name = server_name
        self.server_version = server_version
        self.mcp = FastMCP(server_name, instructions=instructions)
        self.api_client: Any = None
        self._start_time = datetime.now(timezone.utc)
        self._register_health_endpoint()
        self._register_server_info_resource()

        if getattr(self, "logger", None) is None:
            self.logger = logging.getLogger(__name__)

        self.logger.info("Initialising %s...", server_name)

    def uptime_seconds(self) -> float:
        return round((datetime.now(timezone.utc) - self._start_time).total_seconds(), 1)

    def _register_health_endpoint(self) -> None:
        """Register HTTP /health endpoint for container orchestration."""
        server = self

        @self.mcp.custom_route("/health", methods=["GET"])
        async def health_endpoint(request: Request) -> JSONResponse:
            return JSONResponse(
                {
                    "status": "healthy",
                    "server": server.server_name,
                    "version": server.server_version,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "uptime_seconds": server.uptime_seconds(),
                }
            )

    def _register_server_info_resource(self) -> None:
        """Register the ``server://info`` resource with version and runtime metadata."""
        server = self

        @self.mcp.resource("server://info")
        def server_info() -> str:
            """Server name, version, Python version and start time."""
            return json.dumps(
                {
                    "name": server.server_name,
                    "version": server.server_version,
                    "python_version": sys.version.split()[0],
                    "started_at": server._start_time.isoformat(),
                    "uptime_seconds": server.uptime_seconds(),
                },
                indent=2,
            )

    # Hooks every server implements

    async def create_api_client(self) -> Any:
        """Create and return the services object stored in ``self.api_client``."""
        raise NotImplementedError("Subclasses must implement create_api_client()")

    def register_tools(self) -> None:
        """Register MCP tools, resources and prompts. ``self.api_client`` is set."""
        raise NotImplementedError("Subclasses must implement register_tools()")

    # Overridable hooks

    async def cleanup(self) -> None:
        """Close the services object. Always called on shutdown."""
        if self.api_client is not None and hasattr(self.api_client, "close"):
            try:
                await self.api_client.close()
            finally:
                self.api_client = None
        self.logger.info("Cleanup complete")

    def get_allowed_origins(self) -> list[str]:
        """Return allowed CORS origins. Override to customise."""
        return ["*"]

    def get_allowed_hosts(self) -> list[str]:
        """Return allowed host headers. Override to customise."""
        return ["*"]

    # Lifecycle

    async def initialize_client(self) -> None:
        """Create the services object and run its connection self-test."""
        if self.api_client is not None:
            self.logger.info("Services already initialised.")
            return

        self.logger.info("Creating services for %s...", self.server_name)
        self.api_client = await self.create_api_client()

        if hasattr(self.api_client, "test_connection"):
            try:
                await self.api_client.test_connection()
            except Exception as e:
                # Startup continues; tools report failures per call
                self.logger.warning("Connection self-test failed: %s", e)

    async def run_async_server(
        self,
        transport: TransportType = "http",
        host: str = "0.0.0.0",
        port: int = 8080,
        path: str = "/mcp",
    ) -> None:
        """
        Initialise services, register tools, and run the MCP server.

        This method is the target for ``anyio.run()``.

        Args:
            transport: Transport type ("stdio" or "http")
            host: Host to bind to (HTTP only)
            port: Port to bind to (HTTP only)
            path: Path for HTTP transport
        """
        try:
            await self.initialize_client()
            self.register_tools()
            await setup_transport(
                self.mcp,
                transport=transport,
                host=host,
                port=port,
                path=path,
                allowed_origins=self.get_allowed_origins(),
                allowed_hosts=self.get_allowed_hosts(),
            )
        except Exception as e:
            self.logger.error("Server error: %s", e, exc_info=True)
            raise
        finally:
            await self.cleanup()

    # Entry point

    @classmethod
    def main(
        cls,
        description: str,
        argv: Sequence[str] | None = None,
        default_transport: TransportType = "http",
        default_port: int = 8080,
        **server_kwargs: Any,
    ) -> None:
        """
        Parse arguments, create the server and run it until it stops.

        Args:
            description: Server description for CLI help
            argv: Arguments to parse (default: sys.argv[1:])
            default_transport: Default transport (default: "http")
            default_port: Default HTTP port
            **server_kwargs: Additional kwargs passed to server __init__
        """
        parser = create_argument_parser(
            description,
            default_transport=default_transport,
            default_port=default_port,
        )
        args = parser.parse_args(argv)

        server = cls(**server_kwargs)
        exit_code = 0

        try:
            anyio.run(
                partial(
                    server.run_async_server,
                    transport=args.transport,
                    host=args.host,
                    port=args.port,
                    path=args.path,
                )
            )
            server.logger.info("%s stopped", server.server_name)
        except KeyboardInterrupt:
            server.logger.info("%s interrupted", server.server_name)
        except Exception as e:
            server.logger.critical("Server failed: %s", e, exc_info=True)
            exit_code = 1
        finally:
            server.logger.info("Exit code %d", exit_code)
            if exit_code != 0:
                sys.exit(exit_code)
