"""Monotonic timing helpers."""

import asyncio

__all__ = ["elapsed_ms", "get_now_time"]


def get_now_time() -> float:
    """Get current monotonic time in seconds.

    Uses event loop's monotonic clock for accurate scheduling
    without wall-clock drift.

    Returns:
        Current time in seconds (monotonic).
    """
    return asyncio.get_running_loop().time()


def elapsed_ms(started_at: float) -> int:
    """Whole milliseconds elapsed since ``started_at`` (a get_now_time() value)."""
    return int((get_now_time() - started_at) * 1_000)
