"""
Error taxonomy shared by every handler.

Services raise these; the handlers registered by `register_exception_handlers`
turn them (and Starlette's own HTTP errors) into `{"error": ...}` JSON bodies.
"""
import uuid

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class OrderServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class Unauthorized(OrderServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidInput(OrderServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class StorageFailure(OrderServiceError):
    """
    A connection or statement failure. Only the opaque `reference` reaches the
    client; the underlying exception is logged under the same reference.
    """
    message = "Storage failure"

    def __init__(self, operation: str, reference: str | None = None):
        super().__init__()
        self.operation = operation
        self.reference = reference or uuid.uuid4().hex

    def to_body(self) -> dict:
        return {"error": self.message, "code": self.reference}


async def order_service_error_handler(request: Request, exc: OrderServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": InvalidInput.message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    reference = uuid.uuid4().hex
    logger.exception("unhandled_error", path=request.url.path, reference=reference, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": OrderServiceError.message, "code": reference},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderServiceError, order_service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
