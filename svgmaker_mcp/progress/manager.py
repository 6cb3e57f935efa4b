# svgmaker_mcp/progress/manager.py
"""
Simulated progress reporting for long-running, non-streaming API calls.

The SVGMaker API gives no intermediate progress, so a ProgressManager walks a
fixed phase sequence (initial, preparing, processing, saving, complete) and,
while the remote call is outstanding, runs a background ticker that nudges the
reported value towards the next step without ever reaching it.

Notification delivery is fire-and-forget: every send returns a
NotificationResult and a failed delivery never aborts the tool call.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import IntEnum

from .messages import PhaseMessages

logger = logging.getLogger(__name__)

ProgressToken = str | int

# (token, progress, total, message) -> None
ProgressSender = Callable[[ProgressToken, float, float, str | None], Awaitable[None]]

TOTAL_STEPS = 4
PROCESSING_STEP = 2
DEFAULT_INTERVAL = 5.0
PRECISION = 3

# (distance below the next step, increment applied while below it)
_DECAY_SCHEDULE = ((0.9, 0.1), (0.99, 0.01), (0.999, 0.001))


class ProgressPhase(IntEnum):
    """Lifecycle phases of a progress session, in the only allowed order."""

    NOT_STARTED = 0
    INITIAL = 1
    PREPARING = 2
    PROCESSING = 3
    SAVING = 4
    COMPLETE = 5


class ProgressStateError(RuntimeError):
    """Raised when phase methods are called out of order."""


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a single progress notification attempt."""

    progress: float
    delivered: bool
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def skipped(cls, progress: float) -> "NotificationResult":
        return cls(progress=progress, delivered=False)


def next_progress_value(current: float, step: int = PROCESSING_STEP) -> float:
    """
    Compute the next simulated value during the processing phase.

    Increments shrink as the value approaches step + 1: 0.1 below step + 0.9,
    0.01 below step + 0.99, 0.001 below step + 0.999, then the value holds.
    Results are rounded to PRECISION decimals and always stay below step + 1.

    Args:
        current: Current progress value
        step: Integer step the processing phase started at

    Returns:
        Next progress value (equal to current once the approach is exhausted)
    """
    current = round(current, PRECISION)
    for limit, increment in _DECAY_SCHEDULE:
        if current < round(step + limit, PRECISION):
            return round(current + increment, PRECISION)
    return current


async def send_simple_progress(
    sender: ProgressSender | None,
    progress_token: ProgressToken | None,
    step: float,
    total: float,
    message: str | None = None,
) -> NotificationResult:
    """
    Send a one-off progress notification without a session.

    No-op when either the sender or the token is missing.
    """
    if sender is None or progress_token is None:
        return NotificationResult.skipped(step)

    suffix = f" - {message}" if message else ""
    logger.debug(f"Sending progress update: step {step}/{total}{suffix}")
    try:
        await sender(progress_token, step, total, message)
    except Exception as e:
        logger.warning(f"Error sending progress notification: {e}")
        return NotificationResult(progress=step, delivered=False, error=str(e))
    return NotificationResult(progress=step, delivered=True)


class ProgressManager:
    """
    Progress session for one tool invocation.

    Owns at most one ticker task. Phase methods must be called in order:
    send_initial_progress, send_preparing_progress, start_processing_progress,
    send_saving_progress, send_final_progress. cleanup() may be called at any
    time, any number of times, and ends the session.

    Without a progress token (or sender) the state machine still advances but
    nothing is sent and no ticker is started.
    """

    def __init__(
        self,
        sender: ProgressSender | None,
        progress_token: ProgressToken | None,
        messages: PhaseMessages,
        total_steps: int = TOTAL_STEPS,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        """
        Initialize a progress session (no notifications, no tasks).

        Args:
            sender: Coroutine function delivering one notification
            progress_token: Caller-supplied correlation token (None disables reporting)
            messages: Phase messages for this tool
            total_steps: Terminal step value reported on completion
            interval: Seconds between ticker updates during processing
        """
        self._sender = sender
        self._progress_token = progress_token
        self._messages = messages
        self._total_steps = total_steps
        self._interval = interval

        self._phase = ProgressPhase.NOT_STARTED
        self._current_step = 0
        self._current_progress = 0.0
        self._ticker: asyncio.Task | None = None
        self._closed = False

        logger.debug(
            f"Progress token received: {'YES' if progress_token is not None else 'NO'}"
        )
        if progress_token is not None:
            logger.debug(f"Progress token value: {progress_token!r}")

    @property
    def enabled(self) -> bool:
        """True when notifications will actually be sent."""
        return self._sender is not None and self._progress_token is not None

    @property
    def phase(self) -> ProgressPhase:
        return self._phase

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def current_progress(self) -> float:
        """Last reported value (fractional during processing)."""
        return self._current_progress

    @property
    def total_steps(self) -> int:
        return self._total_steps

    @property
    def is_processing(self) -> bool:
        """True while the ticker task is active."""
        return self._ticker is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    def _advance(self, phase: ProgressPhase) -> None:
        if self._closed:
            raise ProgressStateError(
                f"Progress session already cleaned up (requested {phase.name})"
            )
        if phase != self._phase + 1:
            raise ProgressStateError(
                f"Cannot move from {self._phase.name} to {phase.name}"
            )
        self._phase = phase

    async def _send(self, progress: float, message: str) -> NotificationResult:
        if not self.enabled:
            return NotificationResult.skipped(progress)
        try:
            await self._sender(self._progress_token, progress, self._total_steps, message)
        except Exception as e:
            logger.warning(f"Error sending progress notification: {e}")
            return NotificationResult(progress=progress, delivered=False, error=str(e))
        return NotificationResult(progress=progress, delivered=True)

    async def _send_step(self, step: int, message: str) -> NotificationResult:
        self._current_step = step
        self._current_progress = float(step)
        if self.enabled:
            logger.debug(f"Sending progress update: step {step}/{self._total_steps}")
        return await self._send(float(step), message)

    async def send_initial_progress(self) -> NotificationResult:
        """Report step 0 with the initial message."""
        self._advance(ProgressPhase.INITIAL)
        return await self._send_step(0, self._messages.initial)

    async def send_preparing_progress(self) -> NotificationResult:
        """Report step 1 with the preparing message."""
        self._advance(ProgressPhase.PREPARING)
        return await self._send_step(1, self._messages.preparing)

    async def start_processing_progress(self) -> NotificationResult:
        """
        Report step 2 and start the ticker.

        The ticker only runs when a token is bound; it sends a processing
        update every `interval` seconds until stopped.
        """
        self._advance(ProgressPhase.PROCESSING)
        result = await self._send_step(PROCESSING_STEP, self._messages.processing)
        if self.enabled and self._ticker is None:
            self._ticker = asyncio.create_task(
                self._tick_loop(), name=f"progress-ticker-{self._progress_token}"
            )
        return result

    async def tick(self) -> NotificationResult:
        """
        Advance the simulated processing value and send it.

        Called by the ticker; callable directly in tests. A value that no
        longer moves is not re-sent. Delivery failures are logged only.
        """
        if self._phase != ProgressPhase.PROCESSING or self._closed:
            return NotificationResult.skipped(self._current_progress)

        next_value = next_progress_value(self._current_progress, PROCESSING_STEP)
        if next_value <= self._current_progress:
            return NotificationResult.skipped(self._current_progress)

        self._current_progress = next_value
        if self.enabled:
            logger.debug(
                f"Sending periodic progress update: {next_value}/{self._total_steps}"
            )
        return await self._send(next_value, self._messages.processing)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.tick()

    def stop_processing_progress(self) -> None:
        """Cancel the ticker if it is running. Idempotent."""
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
            logger.debug("Stopped periodic progress updates")

    async def send_saving_progress(self) -> NotificationResult:
        """Stop the ticker, then report step 3 with the saving message."""
        self.stop_processing_progress()
        self._advance(ProgressPhase.SAVING)
        return await self._send_step(3, self._messages.saving)

    async def send_final_progress(self) -> NotificationResult:
        """Report the terminal step with the complete message."""
        self._advance(ProgressPhase.COMPLETE)
        return await self._send_step(self._total_steps, self._messages.complete)

    def cleanup(self) -> None:
        """End the session: cancel any ticker, refuse further notifications."""
        self.stop_processing_progress()
        self._closed = True

    async def __aenter__(self) -> "ProgressManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
