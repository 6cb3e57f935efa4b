# svgmaker_mcp/__main__.py
"""
Entry point for the svgmaker-mcp MCP server.

CRITICAL: Server imports configure_logging() first to prevent stdout pollution.

Exit codes: 0 after a clean shutdown (EOF or SIGINT/SIGTERM), 1 when the API
key is missing or startup fails.
"""

import asyncio
import logging
import os
import sys

# Import lifecycle first: its server import configures logging before anything else
from svgmaker_mcp.runtime.lifecycle import ServerLifecycle
from svgmaker_mcp.config.loader import ConfigError, load_config, require_api_key
from svgmaker_mcp.logging_config import configure_logging, log_fatal_error

logger = logging.getLogger(__name__)


async def main() -> int:
    """
    Main entry point.

    Loads configuration, refuses to start without an API key, then serves
    MCP over stdio until shutdown.
    """
    try:
        config = load_config()
        api_key = require_api_key(config)
    except ConfigError as e:
        logger.error(f"Startup aborted: {e}")
        return 1

    if config.logging.debug:
        # Re-configure to add the debug file handler when enabled via config.yaml
        configure_logging(debug=True)

    lifecycle = ServerLifecycle(config, api_key)
    await lifecycle.run()
    return 0


def run() -> None:
    """
    Synchronous wrapper used by `python -m svgmaker_mcp` and the CLI.

    Ends the process with os._exit so a stdin reader thread still blocked
    after a shutdown signal cannot keep it alive.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        exit_code = loop.run_until_complete(main())
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        exit_code = 0
    except Exception as e:
        log_fatal_error(e)
        exit_code = 1

    logging.shutdown()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(exit_code)


if __name__ == "__main__":
    run()
