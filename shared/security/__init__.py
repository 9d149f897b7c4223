from .api_key import verify_api_key, warn_missing_credentials
from .dependencies import verify_list_key, verify_update_key
from .rate_limiter import create_limiter

__all__ = [
    "verify_api_key",
    "warn_missing_credentials",
    "verify_list_key",
    "verify_update_key",
    "create_limiter"
]
