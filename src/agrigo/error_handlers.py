"""FastAPI rendering of marketplace, request-schema and unexpected errors."""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from agrigo.errors import InternalError, MarketplaceError

logger = structlog.get_logger(__name__)


async def _marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(
        status_code=400,
        content={
            "message": "Missing or malformed fields",
            "error": "ValidationError",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected failure", path=request.url.path, method=request.method)
    error = InternalError(f"Error processing {request.method} {request.url.path}", detail=str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean, marketplace, request-schema and catch-all handlers."""
    register_exception_handlers(app)
    app.add_exception_handler(MarketplaceError, _marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
