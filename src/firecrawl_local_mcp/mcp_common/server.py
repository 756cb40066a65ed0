"""
Server lifecycle, transport and CLI helpers for MCP servers.

``BaseMCPServer`` owns the FastMCP instance and drives startup: create the
backend client, probe it, register tools, then serve until the transport
ends or a shutdown signal arrives.

Usage:
    >>> class MyServer(BaseMCPServer):
    ...     async def create_api_client(self):
    ...         return MyApiClient()
    ...     def register_tools(self):
    ...         register_my_tools(self.mcp, self.api_client)
    >>> MyServer.main("My MCP Server", default_transport="stdio")
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from datetime import datetime, timezone
from functools import partial
from types import FrameType
from typing import Any, Literal, TypeAlias

import anyio
from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

Transport: TypeAlias = Literal["stdio", "http"]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_PATH = "/mcp"


def create_middleware(allowed_origins: list[str], allowed_hosts: list[str]) -> list[Middleware]:
    """Build the CORS and trusted-host middleware used by the HTTP transport."""
    cors = Middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    trusted_hosts = Middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)
    return [cors, trusted_hosts]


async def setup_transport(
    mcp: FastMCP,
    transport: Transport = "stdio",
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    path: str = DEFAULT_PATH,
    allowed_origins: list[str] | None = None,
    allowed_hosts: list[str] | None = None,
) -> None:
    """
    Serve ``mcp`` on the chosen transport until it stops.

    Args:
        mcp: FastMCP server instance
        transport: "stdio" or "http" (streamable HTTP)
        host: Bind address, HTTP only
        port: Bind port, HTTP only
        path: Endpoint path, HTTP only
        allowed_origins: CORS origins, ["*"] when omitted
        allowed_hosts: Accepted Host headers, ["*"] when omitted

    Raises:
        ValueError: For any other transport name
    """
    logger = logging.getLogger(__name__)

    if transport == "stdio":
        logger.info("Starting MCP server via stdio...")
        await mcp.run_async(transport="stdio")
        return

    if transport != "http":
        logger.error(f"Unsupported transport type: {transport}")
        raise ValueError(f"Unsupported transport: {transport}")

    logger.info(f"Starting MCP server via http on {host}:{port}{path}...")
    await mcp.run_async(
        transport="http",
        host=host,
        port=port,
        path=path,
        middleware=create_middleware(allowed_origins or ["*"], allowed_hosts or ["*"]),
    )


def create_argument_parser(
    description: str,
    default_transport: str = "stdio",
    include_base_url: bool = False,
    epilog: str | None = None,
) -> argparse.ArgumentParser:
    """
    Build the command line parser shared by MCP servers.

    Args:
        description: Text shown at the top of ``--help``
        default_transport: Transport used when ``--transport`` is absent
        include_base_url: Add ``-u/--url`` for the backend location
        epilog: Text shown after the options, printed as written

    Examples:
        >>> parser = create_argument_parser("My MCP Server", include_base_url=True)
        >>> parser.parse_args(["--url", "http://localhost:3002"]).url
        'http://localhost:3002'
    """
    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    if include_base_url:
        parser.add_argument(
            "-u",
            "--url",
            default=None,
            help="Backend instance URL. Overrides environment variables.",
        )

    transport = parser.add_argument_group("transport")
    transport.add_argument(
        "--transport",
        default=default_transport,
        choices=["stdio", "http"],
        help=f"MCP transport. Default: {default_transport}.",
    )
    transport.add_argument("--host", default=DEFAULT_HOST, help=f"HTTP bind address. Default: {DEFAULT_HOST}.")
    transport.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"HTTP port. Default: {DEFAULT_PORT}.")
    transport.add_argument("--path", default=DEFAULT_PATH, help=f"HTTP endpoint path. Default: {DEFAULT_PATH}.")

    return parser


class BaseMCPServer:
    """
    Shared lifecycle for MCP servers that front one backend client.

    Subclasses implement ``create_api_client()`` and ``register_tools()``,
    and may override ``cleanup()``, ``get_allowed_origins()`` and
    ``get_allowed_hosts()``.

    Every instance also serves a ``server://info`` resource and, on the
    HTTP transport, a ``GET /health`` route.
    """

    # Subclasses set their own service logger
    logger: logging.Logger

    def __init__(
        self,
        server_name: str,
        instructions: str | None = None,
        server_version: str | None = None,
    ):
        self.server_name = server_name
        self.server_version = server_version or "unknown"
        self.mcp = FastMCP(server_name, instructions=instructions)
        self.api_client: Any = None
        self.shutdown_event: asyncio.Event | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._start_time = datetime.now(timezone.utc)

        if getattr(self, "logger", None) is None:
            self.logger = logging.getLogger(__name__)

        self._register_health_endpoint()
        self._register_server_info_resource()
        self.logger.info(f"Initialising {server_name}...")

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def _register_health_endpoint(self) -> None:
        server = self

        @self.mcp.custom_route("/health", methods=["GET"])
        async def health_endpoint(request: Request) -> JSONResponse:
            """Liveness probe for container orchestration."""
            return JSONResponse(
                {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "server": server.server_name,
                    "uptime_seconds": server.uptime_seconds(),
                }
            )

    def _register_server_info_resource(self) -> None:
        server = self

        @self.mcp.resource("server://info")
        def server_info() -> str:
            """Server name, version, Python version and start time."""
            return json.dumps(server.server_info(), indent=2)

    def server_info(self) -> dict[str, Any]:
        """Describe the running server."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "python_version": sys.version.split()[0],
            "started_at": self._start_time.isoformat(),
            "uptime_seconds": self.uptime_seconds(),
        }

    def uptime_seconds(self) -> float:
        return round((datetime.now(timezone.utc) - self._start_time).total_seconds(), 1)

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    async def create_api_client(self) -> Any:
        """Create the backend client; stored as ``self.api_client``."""
        raise NotImplementedError("Subclasses must implement create_api_client()")

    def register_tools(self) -> None:
        """Register MCP tools. Runs once ``self.api_client`` is set."""
        raise NotImplementedError("Subclasses must implement register_tools()")

    async def cleanup(self) -> None:
        """Release the backend client. Always runs on the way out."""
        if self.api_client is not None and hasattr(self.api_client, "close"):
            try:
                await self.api_client.close()
            except Exception as e:
                self.logger.error(f"Error closing API client: {e}", exc_info=True)
            finally:
                self.api_client = None
        self.logger.info("Cleanup complete")

    def get_allowed_origins(self) -> list[str]:
        return ["*"]

    def get_allowed_hosts(self) -> list[str]:
        return ["*"]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _setup_signal_handlers(self) -> None:
        if sys.platform != "win32":
            signal.signal(signal.SIGTERM, self._signal_handler)
            signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum: int, frame: FrameType | None) -> None:
        self.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        if self.shutdown_event is not None and self._loop is not None:
            # Signal handlers run outside the loop's callbacks
            self._loop.call_soon_threadsafe(self.shutdown_event.set)

    async def initialize_client(self) -> None:
        """
        Create the backend client and probe it.

        Raises:
            Exception: Whatever ``create_api_client()`` raised; the probe
                itself never fails startup
        """
        if self.api_client is not None:
            return

        try:
            self.api_client = await self.create_api_client()
        except Exception as e:
            self.logger.error(f"Failed to initialise API client: {e}", exc_info=True)
            self.api_client = None
            raise

        await self._test_connection()

    async def _test_connection(self) -> None:
        probe = getattr(self.api_client, "test_connection", None)
        if probe is None:
            return

        try:
            if await probe():
                self.logger.info("Connection test passed - backend is reachable")
        except Exception as e:
            self.logger.warning(
                f"Connection test failed, backend may be unavailable: {e}. "
                f"Server will start but tool calls fail until it is reachable."
            )

    async def run_async_server(
        self,
        transport: Transport = "stdio",
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        path: str = DEFAULT_PATH,
    ) -> None:
        """Start up, serve until the transport ends or a signal arrives, then clean up."""
        self.shutdown_event = asyncio.Event()
        self._loop = asyncio.get_running_loop()
        self._setup_signal_handlers()

        try:
            await self.initialize_client()
            self.register_tools()

            async with anyio.create_task_group() as tg:

                async def _cancel_on_shutdown() -> None:
                    await self.shutdown_event.wait()
                    tg.cancel_scope.cancel()

                tg.start_soon(_cancel_on_shutdown)
                await setup_transport(
                    self.mcp,
                    transport=transport,
                    host=host,
                    port=port,
                    path=path,
                    allowed_origins=self.get_allowed_origins(),
                    allowed_hosts=self.get_allowed_hosts(),
                )
                tg.cancel_scope.cancel()
        except Exception as e:
            self.logger.error(f"Server error: {e}", exc_info=True)
            raise
        finally:
            await self.cleanup()

    @classmethod
    def main(
        cls,
        description: str,
        default_transport: str = "stdio",
        include_base_url: bool = False,
        epilog: str | None = None,
        argv: list[str] | None = None,
        **server_kwargs: Any,
    ) -> None:
        """
        Command line entry point.

        ``--help`` exits 0 before a server exists. A startup or transport
        failure is logged at CRITICAL and exits 1.

        Args:
            description: Help text heading
            default_transport: Transport when ``--transport`` is absent
            include_base_url: Accept ``-u/--url`` and pass it on as ``base_url``
            epilog: Help text footer
            argv: Arguments to parse instead of ``sys.argv[1:]``
            **server_kwargs: Passed to the server constructor
        """
        parser = create_argument_parser(
            description,
            default_transport=default_transport,
            include_base_url=include_base_url,
            epilog=epilog,
        )
        args = parser.parse_args(argv)

        if include_base_url and args.url:
            server_kwargs["base_url"] = args.url

        server = cls(**server_kwargs)
        run = partial(server.run_async_server, transport=args.transport, host=args.host, port=args.port, path=args.path)

        try:
            anyio.run(run)
        except KeyboardInterrupt:
            server.logger.info("Server execution interrupted by user.")
        except Exception as e:
            server.logger.critical(f"Server failed: {e}", exc_info=True)
            server.logger.info("Server exiting with code 1.")
            sys.exit(1)

        server.logger.info("Server finished gracefully.")
