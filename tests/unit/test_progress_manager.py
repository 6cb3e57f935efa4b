# tests/unit/test_progress_manager.py
"""
Tests for the simulated progress session.

Tests cover:
    - Phase sequence and values with and without a progress token
    - Asymptotic approach of the processing value
    - Ticker start/stop idempotency and cleanup
    - Notification failures never raising
"""

import asyncio

import pytest

from svgmaker_mcp.progress import (
    GENERATE_MESSAGES,
    NotificationResult,
    ProgressManager,
    ProgressPhase,
    ProgressStateError,
    next_progress_value,
    send_simple_progress,
)


class RecordingSender:
    """Collects (token, progress, total, message) tuples."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[tuple] = []
        self.fail = fail

    async def __call__(self, token, progress, total, message) -> None:
        if self.fail:
            raise RuntimeError("transport closed")
        self.calls.append((token, progress, total, message))

    @property
    def values(self) -> list[float]:
        return [c[1] for c in self.calls]

    @property
    def messages(self) -> list[str]:
        return [c[3] for c in self.calls]


def _manager(sender, token="tok-1", interval=60.0) -> ProgressManager:
    return ProgressManager(sender, token, GENERATE_MESSAGES, interval=interval)


# ---------------------------------------------------------------------------
# next_progress_value
# ---------------------------------------------------------------------------

class TestNextProgressValue:
    def test_coarse_increment_below_point_nine(self):
        assert next_progress_value(2.0) == 2.1
        assert next_progress_value(2.8) == 2.9

    def test_fine_increment_below_point_ninety_nine(self):
        assert next_progress_value(2.9) == 2.91
        assert next_progress_value(2.98) == 2.99

    def test_finest_increment_below_point_nine_nine_nine(self):
        assert next_progress_value(2.99) == 2.991
        assert next_progress_value(2.998) == 2.999

    def test_holds_once_approach_is_exhausted(self):
        assert next_progress_value(2.999) == 2.999

    def test_never_reaches_next_step(self):
        value = 2.0
        for _ in range(1000):
            value = next_progress_value(value)
            assert value < 3.0
        assert value == 2.999

    def test_values_have_three_decimals(self):
        value = 2.0
        for _ in range(40):
            value = next_progress_value(value)
            assert value == round(value, 3)

    def test_custom_step(self):
        assert next_progress_value(0.0, step=0) == 0.1
        assert next_progress_value(0.999, step=0) == 0.999


# ---------------------------------------------------------------------------
# Phase sequence
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_full_sequence_with_token():
    """Values follow 0, 1, 2, 2+eps..., 3, 4 with the right messages and total."""
    sender = RecordingSender()
    progress = _manager(sender)

    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    for _ in range(30):
        await progress.tick()
    await progress.send_saving_progress()
    await progress.send_final_progress()
    progress.cleanup()

    values = sender.values
    assert values[:3] == [0, 1, 2]
    assert values[-2:] == [3, 4]

    fractional = values[3:-2]
    # 9 coarse + 9 fine + 9 finest updates, then the value holds and is not re-sent
    assert len(fractional) == 27
    assert all(2 < v < 3 for v in fractional)
    assert all(b > a for a, b in zip(fractional, fractional[1:]))
    assert fractional[-1] == 2.999

    assert values == sorted(values)
    assert {c[0] for c in sender.calls} == {"tok-1"}
    assert {c[2] for c in sender.calls} == {4}

    assert sender.messages[0] == GENERATE_MESSAGES.initial
    assert sender.messages[1] == GENERATE_MESSAGES.preparing
    assert set(sender.messages[2:-2]) == {GENERATE_MESSAGES.processing}
    assert sender.messages[-2] == GENERATE_MESSAGES.saving
    assert sender.messages[-1] == GENERATE_MESSAGES.complete
    assert progress.phase == ProgressPhase.COMPLETE


@pytest.mark.asyncio
async def test_no_token_sends_nothing():
    """Without a token every phase method is a silent no-op."""
    sender = RecordingSender()
    progress = _manager(sender, token=None)

    results = [
        await progress.send_initial_progress(),
        await progress.send_preparing_progress(),
        await progress.start_processing_progress(),
        await progress.tick(),
        await progress.tick(),
        await progress.send_saving_progress(),
        await progress.send_final_progress(),
    ]

    assert sender.calls == []
    assert not progress.enabled
    assert not progress.is_processing
    assert all(not r.delivered and not r.failed for r in results)
    assert progress.phase == ProgressPhase.COMPLETE


@pytest.mark.asyncio
async def test_no_sender_sends_nothing():
    progress = ProgressManager(None, "tok", GENERATE_MESSAGES)
    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    assert not progress.is_processing
    progress.cleanup()


@pytest.mark.asyncio
async def test_construction_has_no_side_effects():
    sender = RecordingSender()
    progress = _manager(sender)
    assert sender.calls == []
    assert progress.phase == ProgressPhase.NOT_STARTED
    assert not progress.is_processing


@pytest.mark.asyncio
async def test_out_of_order_phase_raises():
    sender = RecordingSender()
    progress = _manager(sender)

    with pytest.raises(ProgressStateError):
        await progress.send_preparing_progress()

    await progress.send_initial_progress()
    with pytest.raises(ProgressStateError):
        await progress.send_saving_progress()

    # Nothing was emitted for the rejected transitions
    assert sender.values == [0]


@pytest.mark.asyncio
async def test_no_transition_after_cleanup():
    sender = RecordingSender()
    progress = _manager(sender)
    await progress.send_initial_progress()
    progress.cleanup()

    with pytest.raises(ProgressStateError):
        await progress.send_preparing_progress()
    assert progress.closed


# ---------------------------------------------------------------------------
# Ticker lifecycle
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_ticker_emits_until_stopped():
    """Real ticker sends fractional updates, and none after stop."""
    sender = RecordingSender()
    progress = _manager(sender, interval=0.01)

    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    assert progress.is_processing

    await asyncio.sleep(0.1)
    progress.stop_processing_progress()
    assert not progress.is_processing

    ticks = [v for v in sender.values if 2 < v < 3]
    assert len(ticks) >= 2

    count = len(sender.calls)
    await asyncio.sleep(0.05)
    assert len(sender.calls) == count


@pytest.mark.asyncio
async def test_saving_stops_ticker_first():
    sender = RecordingSender()
    progress = _manager(sender, interval=0.01)

    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    await asyncio.sleep(0.03)
    await progress.send_saving_progress()

    assert not progress.is_processing
    assert sender.values[-1] == 3

    await asyncio.sleep(0.05)
    assert sender.values[-1] == 3
    assert sender.values == sorted(sender.values)


@pytest.mark.asyncio
async def test_stop_and_cleanup_are_idempotent():
    sender = RecordingSender()
    progress = _manager(sender)

    # Before anything started
    progress.stop_processing_progress()
    progress.cleanup()
    progress.cleanup()
    assert not progress.is_processing

    progress = _manager(sender)
    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    assert progress.is_processing

    progress.stop_processing_progress()
    progress.stop_processing_progress()
    progress.cleanup()
    progress.cleanup()
    assert not progress.is_processing


@pytest.mark.asyncio
async def test_tick_outside_processing_is_skipped():
    sender = RecordingSender()
    progress = _manager(sender)
    result = await progress.tick()
    assert result == NotificationResult.skipped(0.0)
    assert sender.calls == []


@pytest.mark.asyncio
async def test_async_context_manager_cleans_up():
    sender = RecordingSender()
    async with _manager(sender, interval=0.01) as progress:
        await progress.send_initial_progress()
        await progress.send_preparing_progress()
        await progress.start_processing_progress()
        assert progress.is_processing
    assert not progress.is_processing
    assert progress.closed


# ---------------------------------------------------------------------------
# Delivery failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delivery_failures_are_reported_not_raised():
    sender = RecordingSender(fail=True)
    progress = _manager(sender)

    initial = await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()
    tick = await progress.tick()
    saving = await progress.send_saving_progress()
    final = await progress.send_final_progress()

    assert initial.failed and "transport closed" in initial.error
    assert tick.failed and tick.progress == 2.1
    assert saving.failed
    assert final.failed
    assert progress.phase == ProgressPhase.COMPLETE


@pytest.mark.asyncio
async def test_ticker_survives_delivery_failures():
    sender = RecordingSender(fail=True)
    progress = _manager(sender, interval=0.01)
    await progress.send_initial_progress()
    await progress.send_preparing_progress()
    await progress.start_processing_progress()

    await asyncio.sleep(0.05)
    # Value kept advancing even though nothing was delivered
    assert progress.current_progress > 2
    assert progress.is_processing
    progress.cleanup()


# ---------------------------------------------------------------------------
# send_simple_progress
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_send_simple_progress():
    sender = RecordingSender()
    result = await send_simple_progress(sender, 7, 1, 4, "step one")
    assert result.delivered
    assert sender.calls == [(7, 1, 4, "step one")]


@pytest.mark.asyncio
async def test_send_simple_progress_without_token():
    sender = RecordingSender()
    result = await send_simple_progress(sender, None, 1, 4)
    assert not result.delivered
    assert sender.calls == []


@pytest.mark.asyncio
async def test_send_simple_progress_failure():
    result = await send_simple_progress(RecordingSender(fail=True), "t", 2, 4, "x")
    assert result.failed
