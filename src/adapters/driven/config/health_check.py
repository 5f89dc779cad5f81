"""Healthcheck validator for container orchestration."""

import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.core.validation import validate_settings

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Run health check for container orchestration.

    Validates:
    - Required environment variables are set and well-typed.
    - Host, username and the credential for the chosen method are present.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
        validate_settings(settings.to_port())
    except Exception as exc:
        logger.error(f"SFTP check healthcheck FAILED: {exc}")
        return 1

    logger.info("SFTP check healthcheck OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
