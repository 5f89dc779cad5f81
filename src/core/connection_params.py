"""Translate settings into transport-ready connection parameters."""

import base64
import binascii

from src.core.errors import CredentialFormatError
from src.core.validation import parse_auth_method
from src.ports.settings import AuthMethod, CheckSettingsPort
from src.ports.sftp import (
    ConnectionParams,
    Credential,
    KeyLoader,
    PasswordCredential,
    PrivateKeyCredential,
)

__all__ = ["build_connection_params", "decode_private_key"]


def decode_private_key(encoded: str) -> bytes:
    """Decode the Base64 private key setting into raw key file bytes.

    Whitespace (line wrapping from copy/paste) is ignored; anything else
    outside the Base64 alphabet is rejected.

    Raises:
        CredentialFormatError: If the value is not valid Base64.
    """
    compact = "".join(encoded.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialFormatError(f"Private key is not valid Base64: {e}") from e


def build_connection_params(
    settings: CheckSettingsPort,
    key_loader: KeyLoader,
) -> ConnectionParams:
    """Build connection parameters for one check.

    Called for every check rather than cached, so rotated credentials
    are picked up without a restart.

    Args:
        settings: Validated settings.
        key_loader: Turns raw key bytes (and optional passphrase) into key
            material for the transport adapter.

    Returns:
        Connection parameters carrying host, port, credential and timeout.

    Raises:
        CredentialFormatError: If key material cannot be decoded or parsed.
    """
    credential: Credential
    if parse_auth_method(settings.auth_method) is AuthMethod.PRIVATE_KEY:
        key_bytes = decode_private_key(settings.private_key_base64 or "")
        passphrase = settings.private_key_passphrase or None
        key = key_loader(key_bytes, passphrase)
        credential = PrivateKeyCredential(username=settings.username, key=key)
    else:
        credential = PasswordCredential(
            username=settings.username,
            password=settings.password or "",
        )

    return ConnectionParams(
        host=settings.host,
        port=settings.port,
        username=settings.username,
        credential=credential,
        timeout_sec=float(settings.connection_timeout_sec),
    )
