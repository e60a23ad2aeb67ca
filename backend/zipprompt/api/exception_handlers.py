"""
Centralized exception handlers for consistent error responses

This module provides FastAPI exception handlers that ensure all errors
are returned in a consistent JSON format:

    {"error": "<code>", "message": "<human readable>"}
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from zipprompt.services.archive import ArchiveError, ArchiveSecurityError
from zipprompt.services.validators import FileValidationError

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):
    """
    Register all exception handlers on the FastAPI app.

    Call this after creating the FastAPI app instance:
        app = FastAPI()
        setup_exception_handlers(app)
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors with detailed field info"""
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": errors
            }
        )

    @app.exception_handler(FileValidationError)
    async def file_validation_handler(request: Request, exc: FileValidationError):
        """Rejected uploads: missing file, wrong content type, too large"""
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_upload",
                "message": exc.message,
                "details": exc.details
            }
        )

    @app.exception_handler(ArchiveError)
    async def archive_error_handler(request: Request, exc: ArchiveError):
        """Archives that cannot be opened or fail safety checks; the upload route has already logged them"""
        code = "unsafe_archive" if isinstance(exc, ArchiveSecurityError) else "invalid_archive"

        return JSONResponse(
            status_code=400,
            content={
                "error": code,
                "message": str(exc)
            }
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        """Handle value errors as bad requests"""
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_value",
                "message": str(exc)
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all handler for unhandled exceptions"""
        logger.exception(f"Unhandled exception: {exc}")

        # Don't expose internal details in production
        from zipprompt.core.config import settings

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_error",
                    "message": str(exc),
                    "type": type(exc).__name__
                }
            )

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "File processing failed"
            }
        )
