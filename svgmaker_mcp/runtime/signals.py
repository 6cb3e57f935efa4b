# svgmaker_mcp/runtime/signals.py
"""
Graceful shutdown signal handling for Windows and Unix.

Registers SIGINT/SIGTERM handlers that ask the server lifecycle to stop.
"""

import asyncio
import logging
import signal
from collections.abc import Callable

logger = logging.getLogger(__name__)


def setup_signal_handlers(on_shutdown: Callable[[str], None]) -> None:
    """
    Set up signal handlers for graceful shutdown.

    Handles SIGINT (Ctrl+C) and SIGTERM with platform-specific fallbacks.

    On Windows (ProactorEventLoop), add_signal_handler is not supported,
    so we fall back to signal.signal().

    Args:
        on_shutdown: Called with the signal name; must not block
    """
    loop = asyncio.get_running_loop()

    def _signal_callback(sig_num, frame) -> None:
        """Fallback signal handler for Windows."""
        sig_name = signal.Signals(sig_num).name
        logger.info(f"Signal handler triggered: {sig_name}")
        loop.call_soon_threadsafe(on_shutdown, sig_name)

    # Try loop-based signal handling (Unix)
    try:
        loop.add_signal_handler(signal.SIGINT, on_shutdown, "SIGINT")
        loop.add_signal_handler(signal.SIGTERM, on_shutdown, "SIGTERM")
        logger.info("Signal handlers registered (loop-based)")

    except NotImplementedError:
        # Fall back to signal.signal() for Windows
        signal.signal(signal.SIGINT, _signal_callback)
        signal.signal(signal.SIGTERM, _signal_callback)
        logger.info("Signal handlers registered (fallback for Windows)")


def remove_signal_handlers() -> None:
    """Restore default handling for SIGINT/SIGTERM on the running loop."""
    loop = asyncio.get_running_loop()
    try:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
    except NotImplementedError:
        signal.signal(signal.SIGINT, signal.default_int_handler)
        signal.signal(signal.SIGTERM, signal.SIG_DFL)
