"""Global exception handlers.

Store errors become ``{"detail": message}`` with the status the error class
carries. Request validation failures answer 400 rather than FastAPI's 422.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sponsor_hub.core.errors import StoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.info(
            "%s: %s", type(exc).__name__, exc.message,
            extra={"path": request.url.path, "status_code": exc.http_status},
        )
        return JSONResponse(status_code=exc.http_status, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )
