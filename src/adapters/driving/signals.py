"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable

__all__ = ["make_wait_for_sigterm"]

logger = logging.getLogger(__name__)


def make_wait_for_sigterm() -> Callable[[], Awaitable[bool]]:
    """Create SIGTERM-based stop waiter for the service.

    Registers SIGTERM/SIGINT handlers that set an asyncio.Event and
    returns the event's wait() so the caller can block until shutdown.

    On Docker/Kubernetes, SIGTERM is sent 30s before SIGKILL,
    allowing in-flight checks to finish.

    Returns:
        Coroutine function that completes once a termination signal arrives.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal() -> None:
        """Signal handler that sets the stop event on SIGTERM/SIGINT."""
        logger.info("Termination signal received, initiating graceful shutdown...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal)

    return stop.wait
