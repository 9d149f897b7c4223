"""
Shared-secret checks for the protected order endpoints.

Keys come from configuration (see `Settings.credential_for`). A scope with no
configured key is not open: it refuses everything, and start-up warns about it.
"""
import secrets
import warnings

from shared.config.settings import SCOPE_LIST, SCOPE_UPDATE, Settings


def verify_api_key(provided_key: str | None, expected_key: str) -> bool:
    """Verify an API key using constant-time comparison to prevent timing attacks."""
    if not provided_key or not expected_key:
        return False
    return secrets.compare_digest(provided_key.encode("utf-8"), expected_key.encode("utf-8"))


def warn_missing_credentials(settings: Settings) -> None:
    for scope in (SCOPE_LIST, SCOPE_UPDATE):
        if not settings.credential_for(scope):
            warnings.warn(
                f"No API key configured for scope {scope!r}; every request to it "
                "will be refused. Set ORDERS_API_KEY in production!",
                stacklevel=2,
            )
