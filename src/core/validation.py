"""Settings validation, run once before the scheduler starts."""

from src.core.errors import ConfigurationError
from src.ports.settings import AuthMethod, CheckSettingsPort

__all__ = ["parse_auth_method", "validate_settings"]


def parse_auth_method(raw: str | None) -> AuthMethod:
    """Normalize an authentication method name, ignoring case and padding.

    Args:
        raw: Configured value; None means the default (password).

    Returns:
        The matching AuthMethod.

    Raises:
        ConfigurationError: If the value is neither 'Password' nor 'PrivateKey'.
    """
    normalized = "password" if raw is None else raw.strip().lower()
    try:
        return AuthMethod(normalized)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid Authentication Method '{raw}'. Use 'Password' or 'PrivateKey'."
        ) from e


def validate_settings(settings: CheckSettingsPort) -> AuthMethod:
    """Check that settings describe a usable target.

    Args:
        settings: Settings to validate.

    Returns:
        The normalized authentication method.

    Raises:
        ConfigurationError: Naming the first missing or invalid field.
    """
    if not settings.host or not settings.host.strip():
        raise ConfigurationError("Host is required.")

    if not settings.username or not settings.username.strip():
        raise ConfigurationError("Username is required.")

    auth_method = parse_auth_method(settings.auth_method)

    if auth_method is AuthMethod.PASSWORD:
        if not settings.password or not settings.password.strip():
            raise ConfigurationError(
                "Password is required when Authentication Method is 'Password'."
            )
    elif not settings.private_key_base64 or not settings.private_key_base64.strip():
        raise ConfigurationError(
            "Private Key (Base64) is required when Authentication Method is 'PrivateKey'."
        )

    return auth_method
