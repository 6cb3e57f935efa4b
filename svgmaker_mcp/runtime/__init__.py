# svgmaker_mcp/runtime/__init__.py
"""Process lifecycle: startup, signal handling, and shutdown."""

from .lifecycle import ServerLifecycle
from .signals import remove_signal_handlers, setup_signal_handlers

__all__ = ["ServerLifecycle", "setup_signal_handlers", "remove_signal_handlers"]
