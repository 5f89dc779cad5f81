"""Error types raised by the check core."""

__all__ = ["ConfigurationError", "CredentialFormatError", "NotConnectedError"]


class ConfigurationError(ValueError):
    """Settings are invalid; the scheduler must not start."""


class CredentialFormatError(ValueError):
    """Configured key material cannot be decoded or parsed."""


class NotConnectedError(RuntimeError):
    """Connect returned without error but the session is not established."""
