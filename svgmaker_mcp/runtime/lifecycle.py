# svgmaker_mcp/runtime/lifecycle.py
"""
Server lifecycle management.

Owns the process-wide SVGMaker client, builds the MCP server around it, and
coordinates startup, signal-driven shutdown, and cleanup.
"""

import asyncio
import logging

from fastmcp import FastMCP

from svgmaker_mcp.config.schema import SvgMakerConfig
from svgmaker_mcp.logging_config import log_session_end, log_session_start
from svgmaker_mcp.runtime.signals import remove_signal_handlers, setup_signal_handlers
from svgmaker_mcp.server import create_server
from svgmaker_mcp.services.client import SvgMakerClient

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 2.0


class ServerLifecycle:
    """
    Server lifecycle coordinator.

    Manages:
        - SVGMaker client creation and teardown
        - MCP server construction
        - Signal handler registration
        - Graceful shutdown (transport closed, in-flight API calls not interrupted)
    """

    def __init__(
        self,
        config: SvgMakerConfig,
        api_key: str,
        client: SvgMakerClient | None = None,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT,
    ) -> None:
        """
        Initialize server lifecycle manager.

        Args:
            config: Loaded configuration
            api_key: SVGMaker API key
            client: Optional pre-built client (tests)
            shutdown_timeout: Seconds to wait for the transport to stop after
                a shutdown request before giving up on it
        """
        self._config = config
        self._client = client or SvgMakerClient.from_config(config, api_key)
        self._mcp = create_server(self._client, config)
        self._shutdown_timeout = shutdown_timeout
        self._serve_task: asyncio.Task | None = None
        self._shutdown_event = asyncio.Event()
        self._shutdown_requested = False
        self._closed = False

    @property
    def mcp(self) -> FastMCP:
        return self._mcp

    @property
    def client(self) -> SvgMakerClient:
        return self._client

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    def request_shutdown(self, sig_name: str = "shutdown") -> None:
        """Stop serving new requests. Safe to call repeatedly."""
        logger.info(f"Received {sig_name}, shutting down gracefully...")
        self._shutdown_requested = True
        self._shutdown_event.set()
        if self._serve_task is not None and not self._serve_task.done():
            self._serve_task.cancel()

    async def run(self) -> None:
        """
        Serve MCP over stdio until EOF or a shutdown signal.

        After a shutdown request the transport gets `shutdown_timeout` seconds
        to stop. Its stdin reader runs in a worker thread that cannot be
        cancelled, so it may still be pending when this returns; the caller
        is expected to end the process. Always closes the client on exit.
        """
        log_session_start()
        self._serve_task = asyncio.create_task(self._mcp.run_stdio_async())
        shutdown_wait = asyncio.create_task(self._shutdown_event.wait())
        setup_signal_handlers(self.request_shutdown)
        logger.info("Starting MCP server on stdio transport")

        try:
            await asyncio.wait(
                {self._serve_task, shutdown_wait}, return_when=asyncio.FIRST_COMPLETED
            )
            if self._shutdown_requested:
                done, _ = await asyncio.wait({self._serve_task}, timeout=self._shutdown_timeout)
                if not done:
                    logger.warning(
                        f"Transport did not stop within {self._shutdown_timeout:g}s, "
                        f"abandoning stdin reader"
                    )
            else:
                # Re-raise a transport failure
                self._serve_task.result()
        finally:
            shutdown_wait.cancel()
            if not self._serve_task.done():
                self._serve_task.cancel()
            remove_signal_handlers()
            await self.shutdown()

    async def shutdown(self) -> None:
        """Close the SVGMaker client. Idempotent."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        log_session_end()
        logger.info("Shutdown complete")
