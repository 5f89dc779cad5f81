"""Configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from src.ports.settings import CheckSettingsPort

__all__ = ["ENV_FIELDS", "Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)

# Environment variable -> Settings field
ENV_FIELDS: dict[str, str] = {
    "SFTP_HOST": "sftp_host",
    "SFTP_PORT": "sftp_port",
    "SFTP_USERNAME": "sftp_username",
    "SFTP_AUTH_METHOD": "auth_method",
    "SFTP_PASSWORD": "password",
    "SFTP_PRIVATE_KEY_BASE64": "private_key_base64",
    "SFTP_PRIVATE_KEY_PASSPHRASE": "private_key_passphrase",
    "CHECK_INTERVAL_SECONDS": "check_interval_sec",
    "CONNECTION_TIMEOUT_SECONDS": "connection_timeout_sec",
    "TEST_DIRECTORY_PATH": "test_directory_path",
    "FRIENDLY_NAME": "friendly_name",
    "LOG_SUCCESSFUL_CHECKS": "log_successful_checks",
}

REQUIRED_ENV = ("SFTP_HOST", "SFTP_USERNAME")


class Settings(BaseModel):
    """Runtime configuration for one SFTP connectivity check.

    Only types and ranges are checked here; whether the combination of
    fields is usable (credentials for the chosen method, ...) is decided
    by the core validator when the scheduler starts.

    Attributes:
        sftp_host: Hostname or IP address of the SFTP server.
        sftp_port: SFTP port.
        sftp_username: Username for authentication.
        auth_method: 'Password' or 'PrivateKey' (any casing).
        password: Password for password authentication.
        private_key_base64: Base64-encoded private key file.
        private_key_passphrase: Passphrase for an encrypted private key.
        check_interval_sec: Seconds between checks (minimum 30 is enforced
            by the scheduler).
        connection_timeout_sec: Connection timeout in seconds.
        test_directory_path: Optional directory to list after connecting.
        friendly_name: Optional label used in log records.
        log_successful_checks: Log successes too, not only failures.
    """

    sftp_host: str = Field(..., description="SFTP server hostname or IP address.")
    sftp_port: int = Field(default=22, ge=1, le=65535, description="SFTP port.")
    sftp_username: str = Field(..., description="Username for SFTP authentication.")
    auth_method: str = Field(default="Password", description="'Password' or 'PrivateKey'.")
    password: str | None = Field(default=None, description="Password (password auth).")
    private_key_base64: str | None = Field(
        default=None,
        description="Private key file content encoded as Base64 (key auth).",
    )
    private_key_passphrase: str | None = Field(
        default=None,
        description="Passphrase for the private key, if it is encrypted.",
    )
    check_interval_sec: int = Field(default=300, description="Seconds between checks.")
    connection_timeout_sec: int = Field(
        default=30, gt=0, description="Timeout for the connection attempt in seconds."
    )
    test_directory_path: str | None = Field(
        default=None,
        description="Optional directory to list as an additional check.",
    )
    friendly_name: str | None = Field(
        default=None,
        description="Friendly name used in log records; defaults to the host.",
    )
    log_successful_checks: bool = Field(
        default=True,
        description="If false, only failed checks are logged.",
    )

    @field_validator(
        "password",
        "private_key_base64",
        "test_directory_path",
        "friendly_name",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional values as not configured."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("private_key_passphrase")
    @classmethod
    def empty_passphrase_to_none(cls, v: str | None) -> str | None:
        """Treat an empty passphrase as not configured (whitespace is a valid passphrase)."""
        return v or None

    def to_port(self) -> CheckSettingsPort:
        """Convert to the settings port consumed by the core."""
        return CheckSettingsPort(
            host=self.sftp_host,
            port=self.sftp_port,
            username=self.sftp_username,
            auth_method=self.auth_method,
            password=self.password,
            private_key_base64=self.private_key_base64,
            private_key_passphrase=self.private_key_passphrase,
            check_interval_sec=self.check_interval_sec,
            connection_timeout_sec=self.connection_timeout_sec,
            test_directory_path=self.test_directory_path,
            friendly_name=self.friendly_name,
            log_successful_checks=self.log_successful_checks,
        )


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Required environment variables:
    - SFTP_HOST: Hostname or IP address of the SFTP server.
    - SFTP_USERNAME: Username for authentication.

    Optional: SFTP_PORT, SFTP_AUTH_METHOD, SFTP_PASSWORD,
    SFTP_PRIVATE_KEY_BASE64, SFTP_PRIVATE_KEY_PASSPHRASE,
    CHECK_INTERVAL_SECONDS, CONNECTION_TIMEOUT_SECONDS, TEST_DIRECTORY_PATH,
    FRIENDLY_NAME, LOG_SUCCESSFUL_CHECKS.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars are missing.
        ValueError: If a value has the wrong type or is out of range.
    """
    missing = [name for name in REQUIRED_ENV if name not in os.environ]
    if missing:
        raise RuntimeError(f"Missing required environment variable: {missing[0]}")

    values = {field: os.environ[env] for env, field in ENV_FIELDS.items() if env in os.environ}
    settings = Settings(**values)

    logger.info(
        f"SFTP check configured: target={settings.sftp_host}:{settings.sftp_port}, "
        f"user={settings.sftp_username}, auth={settings.auth_method}, "
        f"interval={settings.check_interval_sec}s, "
        f"timeout={settings.connection_timeout_sec}s, "
        f"test_directory={settings.test_directory_path or '<disabled>'}"
    )

    return settings
