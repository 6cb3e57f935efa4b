# svgmaker_mcp/progress/__init__.py
"""Simulated progress notifications for long-running tool calls."""

from .manager import (
    DEFAULT_INTERVAL,
    TOTAL_STEPS,
    NotificationResult,
    ProgressManager,
    ProgressPhase,
    ProgressSender,
    ProgressStateError,
    ProgressToken,
    next_progress_value,
    send_simple_progress,
)
from .messages import CONVERT_MESSAGES, EDIT_MESSAGES, GENERATE_MESSAGES, PhaseMessages

__all__ = [
    "ProgressManager",
    "ProgressPhase",
    "ProgressStateError",
    "NotificationResult",
    "ProgressSender",
    "ProgressToken",
    "next_progress_value",
    "send_simple_progress",
    "TOTAL_STEPS",
    "DEFAULT_INTERVAL",
    "PhaseMessages",
    "GENERATE_MESSAGES",
    "EDIT_MESSAGES",
    "CONVERT_MESSAGES",
]
