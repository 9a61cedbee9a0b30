"""Application-level exceptions and FastAPI exception handlers."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request body"


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class AppException(Exception):
    """Base exception rendered as a `{message, error}` envelope."""

    def __init__(
        self,
        message: str,
        error: Any = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.message = message
        self.error = error if error is not None else {}
        self.status_code = status_code
        super().__init__(message)


class VendorCallError(AppException):
    """A call to the video platform failed."""

    def __init__(
        self,
        message: str,
        error: Any = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ) -> None:
        super().__init__(message, error=error, status_code=status_code)


class TokenIssueError(AppException):
    """The access token could not be signed."""

    def __init__(self, message: str, error: Any = None) -> None:
        super().__init__(message, error=error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_body(message: str, error: Any) -> dict[str, Any]:
    return {"message": message, "error": error}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.error))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("%s %s -> 422: invalid request", request.method, request.url.path)
        return JSONResponse(
            status_code=422,
            content=error_body(INVALID_REQUEST_MESSAGE, jsonable_encoder(exc.errors())),
        )
