"""
Exception handlers that turn package exceptions into JSON error responses.

Business outcomes (validation, conflict, not found) map to their own status
codes; store failures are logged and answered with a generic message.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import (
    GENERIC_SERVER_ERROR,
    DatabaseException,
    NovelliaException,
    ValidationException,
    create_error_response,
    format_validation_errors,
    log_exception_context,
)

logger = logging.getLogger(__name__)


def _request_context(request: Request) -> dict:
    return {"method": request.method, "path": request.url.path}


async def handle_novellia_exception(
    request: Request, exc: NovelliaException
) -> JSONResponse:
    if isinstance(exc, DatabaseException):
        log_exception_context(exc, _request_context(request), logger)
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=create_error_response(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Undecodable JSON and malformed path ids share the validation body
    error = ValidationException(errors=format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=create_error_response(error))


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log_exception_context(exc, _request_context(request), logger)
    return JSONResponse(status_code=500, content={"error": GENERIC_SERVER_ERROR})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log_exception_context(exc, _request_context(request), logger)
    return JSONResponse(status_code=500, content={"error": GENERIC_SERVER_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per exception family plus a catch-all."""
    app.add_exception_handler(NovelliaException, handle_novellia_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
