"""SFTP transport port definition (interface and DTOs)."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

__all__ = [
    "ConnectionParams",
    "Credential",
    "KeyLoader",
    "PasswordCredential",
    "PrivateKeyCredential",
    "SftpClientFactory",
    "SftpClientPort",
]


@dataclass(slots=True, frozen=True)
class PasswordCredential:
    """Authenticate with username and password."""

    username: str
    password: str


@dataclass(slots=True, frozen=True)
class PrivateKeyCredential:
    """Authenticate with username and a loaded private key.

    Attributes:
        username: Remote user.
        key: Key material object understood by the transport adapter.
    """

    username: str
    key: Any


Credential = PasswordCredential | PrivateKeyCredential


@dataclass(slots=True, frozen=True)
class ConnectionParams:
    """Everything the transport needs to open one SFTP session.

    Attributes:
        host: Remote host.
        port: Remote port.
        username: Remote user.
        credential: How to authenticate.
        timeout_sec: Connection timeout in seconds.
    """

    host: str
    port: int
    username: str
    credential: Credential
    timeout_sec: float


class SftpClientPort(Protocol):
    """Narrow contract the core needs from an SFTP client.

    All methods may block; the core calls them from worker threads.
    A new instance is created for every check.
    """

    def connect(self) -> None:
        """Open an authenticated session. Raises on timeout/auth/network failure."""
        ...

    def is_connected(self) -> bool:
        """Return True while the session is established."""
        ...

    def list_directory(self, path: str) -> Sequence[Any]:
        """List entries of a remote directory. Raises on permission/path error."""
        ...

    def disconnect(self) -> None:
        """Close the session (best-effort)."""
        ...


SftpClientFactory = Callable[[ConnectionParams], SftpClientPort]

# (raw key file bytes, optional passphrase) -> key material
KeyLoader = Callable[[bytes, str | None], Any]
