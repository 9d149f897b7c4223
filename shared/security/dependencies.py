import structlog
from fastapi import Depends, Form, Query, Request
from fastapi.security import APIKeyHeader

from shared.config.settings import SCOPE_LIST, SCOPE_UPDATE
from shared.errors import Unauthorized
from shared.observability.metrics import orders_auth_failures_total
from .api_key import verify_api_key

logger = structlog.get_logger(__name__)

# Optional header alternative to the `key` request parameter
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _check_scope(request: Request, scope: str, provided_key: str | None) -> None:
    settings = request.app.state.settings
    if not verify_api_key(provided_key, settings.credential_for(scope)):
        orders_auth_failures_total.labels(scope=scope).inc()
        logger.warning("api_key_rejected", scope=scope, path=request.url.path)
        raise Unauthorized()


async def verify_list_key(
    request: Request,
    key: str | None = Query(default=None),
    header_key: str | None = Depends(api_key_header),
) -> bool:
    """Dependency guarding the pending-orders listing (`?key=...`)."""
    _check_scope(request, SCOPE_LIST, key or header_key)
    return True


async def verify_update_key(
    request: Request,
    key: str | None = Form(default=None),
    header_key: str | None = Depends(api_key_header),
) -> bool:
    """Dependency guarding status updates (`key` form field)."""
    _check_scope(request, SCOPE_UPDATE, key or header_key)
    return True
