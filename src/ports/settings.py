"""Settings port definition (DTO)."""

from dataclasses import dataclass
from enum import Enum

__all__ = ["AuthMethod", "CheckSettingsPort"]


class AuthMethod(str, Enum):
    """Supported SFTP authentication methods (normalized, lower-case)."""

    PASSWORD = "password"
    PRIVATE_KEY = "privatekey"


@dataclass(frozen=True)
class CheckSettingsPort:
    """Runtime settings for one monitored SFTP target.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        host: Hostname or IP address of the SFTP server.
        username: Username for SFTP authentication.
        port: SFTP port.
        auth_method: Raw authentication method ('Password' or 'PrivateKey',
            any casing).
        password: Password, required in password mode.
        private_key_base64: Base64-encoded private key file content,
            required in private-key mode.
        private_key_passphrase: Passphrase for an encrypted private key.
        check_interval_sec: Seconds between checks (floored by the scheduler).
        connection_timeout_sec: Timeout for the connection attempt.
        test_directory_path: Optional remote directory to list after connecting.
        friendly_name: Optional human-readable label for log records.
        log_successful_checks: If False, only failures are recorded.
    """

    host: str
    username: str
    port: int = 22
    auth_method: str = "Password"
    password: str | None = None
    private_key_base64: str | None = None
    private_key_passphrase: str | None = None
    check_interval_sec: int = 300
    connection_timeout_sec: int = 30
    test_directory_path: str | None = None
    friendly_name: str | None = None
    log_successful_checks: bool = True

    @property
    def display_name(self) -> str:
        """Friendly name if configured, otherwise the host."""
        if self.friendly_name and self.friendly_name.strip():
            return self.friendly_name
        return self.host
