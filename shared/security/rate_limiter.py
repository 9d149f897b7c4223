from slowapi import Limiter
from slowapi.util import get_remote_address


def create_limiter() -> Limiter:
    """
    One limiter per app, so each app keeps its own counters and its own
    configured intake limit.
    """
    # The intake endpoint is public, so clients are keyed by IP address
    return Limiter(key_func=get_remote_address)
