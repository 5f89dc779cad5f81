"""SFTP client adapter built on paramiko."""

import io
import logging
from collections.abc import Sequence

import paramiko

from src.core.errors import CredentialFormatError
from src.ports.sftp import ConnectionParams, PasswordCredential

__all__ = ["KEY_TYPES", "ParamikoSftpClient", "load_private_key"]

logger = logging.getLogger(__name__)

# Tried in order when parsing a private key of unknown type
KEY_TYPES: tuple[type[paramiko.PKey], ...] = (
    paramiko.Ed25519Key,
    paramiko.ECDSAKey,
    paramiko.RSAKey,
)


def load_private_key(key_bytes: bytes, passphrase: str | None = None) -> paramiko.PKey:
    """Parse private key file content (OpenSSH or PEM) into a paramiko key.

    The passphrase is only used for encrypted keys; paramiko ignores it
    for unencrypted ones.

    Args:
        key_bytes: Raw key file content.
        passphrase: Optional passphrase.

    Returns:
        Loaded key.

    Raises:
        CredentialFormatError: If the key is encrypted and no passphrase was
            given, or no supported key type can parse it.
    """
    try:
        key_text = key_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CredentialFormatError("Private key is not a text key file") from e

    errors: list[str] = []
    for key_type in KEY_TYPES:
        try:
            return key_type.from_private_key(io.StringIO(key_text), password=passphrase)
        except paramiko.PasswordRequiredException as e:
            raise CredentialFormatError(
                "Private key is encrypted but no passphrase was configured"
            ) from e
        except Exception as e:  # noqa: BLE001
            # Parsers fail in parser-specific ways on foreign key types
            errors.append(f"{key_type.__name__}: {e}")

    raise CredentialFormatError(f"Unsupported or malformed private key ({'; '.join(errors)})")


class ParamikoSftpClient:
    """SFTP client for a single check.

    Accepts unknown host keys (the goal is reachability, not host
    verification) and authenticates only with the configured credential:
    SSH agent and ~/.ssh keys are never consulted.
    """

    def __init__(self, params: ConnectionParams) -> None:
        """Initialize client (does not connect).

        Args:
            params: Connection parameters for this check.
        """
        self.params = params
        self._ssh: paramiko.SSHClient | None = None
        self._sftp: paramiko.SFTPClient | None = None

    def connect(self) -> None:
        """Open SSH transport, authenticate and start the SFTP subsystem.

        Raises:
            paramiko.SSHException / OSError: On auth, network or timeout failure.
        """
        params = self.params
        ssh = paramiko.SSHClient()
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        if isinstance(params.credential, PasswordCredential):
            auth = {"password": params.credential.password}
        else:
            auth = {"pkey": params.credential.key}

        try:
            ssh.connect(
                hostname=params.host,
                port=params.port,
                username=params.username,
                timeout=params.timeout_sec,
                banner_timeout=params.timeout_sec,
                auth_timeout=params.timeout_sec,
                allow_agent=False,
                look_for_keys=False,
                **auth,
            )
            self._sftp = ssh.open_sftp()
        except BaseException:
            ssh.close()
            raise

        self._ssh = ssh
        logger.debug(f"SFTP session opened to {params.host}:{params.port}")

    def is_connected(self) -> bool:
        if self._ssh is None or self._sftp is None:
            return False
        transport = self._ssh.get_transport()
        return transport is not None and transport.is_active() and transport.is_authenticated()

    def list_directory(self, path: str) -> Sequence[paramiko.SFTPAttributes]:
        """List entries of a remote directory.

        Raises:
            RuntimeError: If called before connect().
            OSError: On missing path or permission error.
        """
        if self._sftp is None:
            raise RuntimeError("SFTP session not open; call connect() first")
        return self._sftp.listdir_attr(path)

    def disconnect(self) -> None:
        """Close the SFTP channel and SSH transport."""
        sftp, self._sftp = self._sftp, None
        ssh, self._ssh = self._ssh, None
        try:
            if sftp is not None:
                sftp.close()
        finally:
            if ssh is not None:
                ssh.close()
