"""Single SFTP connectivity check: connect, optionally list, disconnect."""

import asyncio
import logging

from src.core.clock import elapsed_ms, get_now_time
from src.core.connection_params import build_connection_params
from src.core.errors import CredentialFormatError, NotConnectedError
from src.ports.outcome import CheckError, CheckErrorKind, CheckOutcome
from src.ports.settings import CheckSettingsPort
from src.ports.sftp import KeyLoader, SftpClientFactory, SftpClientPort

__all__ = ["CheckExecutor", "classify_error", "report_outcome"]

logger = logging.getLogger(__name__)


def classify_error(exc: BaseException) -> CheckErrorKind:
    """Map an exception raised during a check to its failure class."""
    if isinstance(exc, CredentialFormatError):
        return CheckErrorKind.MALFORMED_CREDENTIAL
    if isinstance(exc, NotConnectedError):
        return CheckErrorKind.NOT_CONNECTED
    return CheckErrorKind.TRANSPORT


def report_outcome(outcome: CheckOutcome, settings: CheckSettingsPort) -> None:
    """Emit the log record for one check outcome.

    Successes are logged at INFO only when ``log_successful_checks`` is set;
    failures are always logged at ERROR with the underlying error attached.

    Args:
        outcome: Result of the check.
        settings: Settings of the checked target (labels for the record).
    """
    fields = {
        "DisplayName": settings.display_name,
        "SftpHost": settings.host,
        "SftpPort": settings.port,
    }

    if outcome.error is not None:
        logger.error(
            "SFTP check failed for %s (%s:%s) after %sms: %s",
            settings.display_name,
            settings.host,
            settings.port,
            outcome.total_duration_ms,
            outcome.error.message,
            exc_info=outcome.error.exception,
            extra={
                **fields,
                "DurationMs": outcome.total_duration_ms,
                "ErrorMessage": outcome.error.message,
            },
        )
        return

    if not settings.log_successful_checks:
        return

    if outcome.listed_file_count is not None:
        logger.info(
            "SFTP check succeeded for %s (%s:%s). Connect: %sms, Listed %s items in %sms",
            settings.display_name,
            settings.host,
            settings.port,
            outcome.connect_duration_ms,
            outcome.listed_file_count,
            outcome.list_duration_ms,
            extra={
                **fields,
                "ConnectDurationMs": outcome.connect_duration_ms,
                "FileCount": outcome.listed_file_count,
                "ListDurationMs": outcome.list_duration_ms,
            },
        )
    else:
        logger.info(
            "SFTP check succeeded for %s (%s:%s). Connect: %sms",
            settings.display_name,
            settings.host,
            settings.port,
            outcome.connect_duration_ms,
            extra={**fields, "ConnectDurationMs": outcome.connect_duration_ms},
        )


class CheckExecutor:
    """Runs one connectivity check per call and reports its outcome.

    Blocking transport calls run in worker threads so the event loop
    (and with it the scheduler's ticks) stays responsive. Knows nothing
    about cadence or overlap; that is the scheduler's job.
    """

    def __init__(
        self,
        settings: CheckSettingsPort,
        client_factory: SftpClientFactory,
        key_loader: KeyLoader,
    ) -> None:
        """Initialize the executor.

        Args:
            settings: Settings of the target to check.
            client_factory: Creates a fresh SFTP client for each check.
            key_loader: Loads private key material from raw bytes.
        """
        self.settings = settings
        self._client_factory = client_factory
        self._key_loader = key_loader

    async def execute(self) -> None:
        """Run one check and emit exactly one outcome record. Never raises."""
        outcome = await self.run_check()
        report_outcome(outcome, self.settings)

    async def run_check(self) -> CheckOutcome:
        """Perform connect, optional listing and disconnect.

        Returns:
            The classified outcome; every exception becomes a failure outcome.
        """
        started_at = get_now_time()
        client: SftpClientPort | None = None

        try:
            # Key parsing may run a KDF; keep it off the event loop
            params = await asyncio.to_thread(
                build_connection_params, self.settings, self._key_loader
            )
            client = self._client_factory(params)

            await asyncio.to_thread(client.connect)

            if not client.is_connected():
                raise NotConnectedError(
                    "SFTP client reports not connected after connect call."
                )

            connect_duration_ms = elapsed_ms(started_at)

            path = self.settings.test_directory_path
            if path and path.strip():
                list_started_at = get_now_time()
                entries = await asyncio.to_thread(client.list_directory, path)
                outcome = CheckOutcome.success(
                    connect_duration_ms=connect_duration_ms,
                    listed_file_count=len(entries),
                    list_duration_ms=elapsed_ms(list_started_at),
                )
            else:
                outcome = CheckOutcome.success(connect_duration_ms=connect_duration_ms)
        except Exception as e:  # noqa: BLE001
            outcome = CheckOutcome.failure(
                total_duration_ms=elapsed_ms(started_at),
                error=CheckError(
                    kind=classify_error(e),
                    message=str(e) or type(e).__name__,
                    exception=e,
                ),
            )

        if client is not None:
            await self._disconnect_quietly(client)

        return outcome

    async def _disconnect_quietly(self, client: SftpClientPort) -> None:
        """Best-effort disconnect; errors never change the check outcome.

        Always calls disconnect(), even when the client reports no session,
        so a half-open client still releases its resources.
        """
        try:
            if not client.is_connected():
                logger.debug(
                    "Client for %s not connected, closing anyway",
                    self.settings.display_name,
                )
            await asyncio.to_thread(client.disconnect)
        except Exception as e:  # noqa: BLE001
            logger.debug(
                "Disconnect from %s raised, ignoring: %s",
                self.settings.display_name,
                e,
            )
