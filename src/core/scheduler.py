"""Recurring scheduler that triggers connectivity checks without overlap."""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from enum import Enum

from src.core.clock import get_now_time
from src.core.validation import validate_settings
from src.ports.settings import CheckSettingsPort

__all__ = ["CheckScheduler", "MIN_INTERVAL_SEC", "SchedulerState", "effective_interval"]

logger = logging.getLogger(__name__)

MIN_INTERVAL_SEC = 30


class SchedulerState(str, Enum):
    """Lifecycle of a CheckScheduler. There is no way back from STOPPED."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


def effective_interval(configured_sec: float, floor_sec: float = MIN_INTERVAL_SEC) -> float:
    """Apply the minimum interval to a configured check interval."""
    return max(floor_sec, configured_sec)


class CheckScheduler:
    """Runs a check immediately on start and then once per interval.

    At most one check is in flight at any time: a tick that fires while a
    check is still running is dropped (not queued) with a DEBUG record.
    Each check runs as its own asyncio.Task so the ticker never waits on
    slow I/O.

    One instance per monitored target; a stopped instance cannot be
    restarted.
    """

    def __init__(
        self,
        check_fn: Callable[[], Awaitable[None]],
        *,
        min_interval_sec: float = MIN_INTERVAL_SEC,
    ) -> None:
        """Initialize the scheduler.

        Args:
            check_fn: Async callable running one check (expected not to raise).
            min_interval_sec: Floor applied to the configured interval.
        """
        self._check_fn = check_fn
        self._min_interval_sec = min_interval_sec
        self._lock = threading.Lock()
        self._is_checking = False
        self._state = SchedulerState.IDLE
        self._ticker: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self._display_name = ""
        self.interval_sec: float | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_checking(self) -> bool:
        with self._lock:
            return self._is_checking

    def start(self, settings: CheckSettingsPort) -> None:
        """Validate settings, dispatch the first check and start ticking.

        Must be called from a running event loop. Does not wait for the
        first check to finish.

        Args:
            settings: Settings of the target to check.

        Raises:
            ConfigurationError: If settings are invalid; nothing is scheduled.
            RuntimeError: If this instance was already started or stopped.
        """
        if self._state is not SchedulerState.IDLE:
            raise RuntimeError(
                f"Scheduler cannot be started from state '{self._state.value}'; "
                "create a new instance instead"
            )

        validate_settings(settings)

        self._display_name = settings.display_name
        self.interval_sec = effective_interval(
            settings.check_interval_sec, self._min_interval_sec
        )

        logger.info(
            "SFTP Check starting for %s:%s (%s). Check interval: %ss",
            settings.host,
            settings.port,
            self._display_name,
            self.interval_sec,
        )

        loop = asyncio.get_running_loop()
        self._state = SchedulerState.SCHEDULED
        self.trigger()
        self._ticker = loop.create_task(self._tick_forever(self.interval_sec))

    def trigger(self) -> bool:
        """Request a check now, unless one is already in flight.

        Returns:
            True if a check was dispatched, False if the trigger was dropped.
        """
        loop = asyncio.get_running_loop()
        with self._lock:
            if self._state is not SchedulerState.SCHEDULED:
                return False
            if self._is_checking:
                logger.debug(
                    "SFTP check for %s skipped - previous check still in progress",
                    self._display_name,
                    extra={"DisplayName": self._display_name},
                )
                return False
            self._is_checking = True

        task = loop.create_task(self._run_once())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    def stop(self) -> None:
        """Cancel future ticks. Idempotent; in-flight checks run to completion."""
        with self._lock:
            if self._state is SchedulerState.STOPPED:
                return
            was_scheduled = self._state is SchedulerState.SCHEDULED
            self._state = SchedulerState.STOPPED
            ticker, self._ticker = self._ticker, None

        if ticker is not None:
            ticker.cancel()
        if was_scheduled:
            logger.info("SFTP Check stopped for %s", self._display_name)

    async def wait_idle(self) -> None:
        """Wait until no check is in flight."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _tick_forever(self, interval_sec: float) -> None:
        """Trigger a check every interval, keeping cadence on the monotonic clock."""
        next_tick = get_now_time()
        while True:
            next_tick += interval_sec
            await asyncio.sleep(max(0, next_tick - get_now_time()))
            self.trigger()

    async def _run_once(self) -> None:
        """Run one check and always release the in-flight flag."""
        try:
            await self._check_fn()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in check task: {e}", exc_info=True)
        finally:
            with self._lock:
                self._is_checking = False
