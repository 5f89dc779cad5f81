"""Application entrypoint."""

import asyncio
import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.sftp.client import ParamikoSftpClient, load_private_key
from src.adapters.driving.signals import make_wait_for_sigterm
from src.core.check_executor import CheckExecutor
from src.core.errors import ConfigurationError
from src.core.scheduler import CheckScheduler

__all__ = ["main"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the SFTP connectivity check service.

    Startup sequence:
    1. Configure logging.
    2. Load configuration from the environment.
    3. Validate it and start the scheduler (first check runs immediately).
    4. Wait for SIGTERM/SIGINT.
    5. Stop scheduling and let an in-flight check finish.
    """
    configure_logs()
    logger.info("Starting SFTP connectivity check service...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check SFTP_HOST, SFTP_USERNAME, SFTP_PORT, "
            "CHECK_INTERVAL_SECONDS and CONNECTION_TIMEOUT_SECONDS.",
            exc,
        )
        return

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = config.to_port()

    executor = CheckExecutor(
        settings=settings_port,
        client_factory=ParamikoSftpClient,
        key_loader=load_private_key,
    )
    scheduler = CheckScheduler(check_fn=executor.execute)
    wait_for_stop = make_wait_for_sigterm()

    try:
        scheduler.start(settings_port)
    except ConfigurationError as exc:
        logger.error(f"Invalid SFTP check settings, aborting startup: {exc}")
        return

    try:
        await wait_for_stop()
    finally:
        scheduler.stop()
        await scheduler.wait_idle()

    logger.info("SFTP connectivity check stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutdown requested by user (Ctrl+C).")
