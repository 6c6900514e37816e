"""Error taxonomy and FastAPI exception handlers.

Every error returned to a client has the shape ``{"error": "<message>"}``.
Unexpected exceptions are logged with their traceback and reported as a
generic 500 without any detail.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class SenyasError(Exception):
    """Base exception for errors that map onto an HTTP status."""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidMessageTypeError(SenyasError):
    """Raised when a chat message declares an unknown channel."""
    def __init__(self, message_type: Any = None):
        self.message_type = message_type
        super().__init__("Invalid message type", status_code=400)


class MissingFileError(SenyasError):
    """Raised when an upload request carries no file."""
    def __init__(self):
        super().__init__("No file uploaded", status_code=400)


class UploadFailedError(SenyasError):
    """Raised when an uploaded file could not be stored."""
    def __init__(self):
        super().__init__("Error uploading file", status_code=500)


class GenerationError(SenyasError):
    """Raised when the external generation API call fails."""
    def __init__(self, message: str, provider_name: str = "gemini"):
        self.provider_name = provider_name
        super().__init__(f"Provider {provider_name} error: {message}", status_code=502)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_senyas_error(request: Request, exc: SenyasError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(400, "Invalid request body")


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on *app*."""
    app.add_exception_handler(SenyasError, _handle_senyas_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected)
