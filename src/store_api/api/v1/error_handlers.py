"""
FastAPI exception handlers mapping app-level exceptions to HTTP responses.

This is the only place where an error kind becomes a status code:
    - AppError subclasses -> exc.http_status() with exc.to_payload() as the error body
    - RequestValidationError (malformed JSON, wrong body type) -> 400
    - Starlette HTTPException (unknown route, wrong method) -> its own status
    - anything else -> 500 with a generic message; the exception text is only
      included when ENV == "development"
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from store_api.exceptions.base import AppError
from .responses import error_response

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status = exc.http_status()
    if status >= 500:
        # Storage failures: keep the cause chain in the logs, not in the response
        logger.error("%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, str(exc),
                     exc_info=exc.__cause__ is not None)
    else:
        logger.info("%s for %s %s: fields=%s", type(exc).__name__, request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=status, content={"success": False, "error": exc.to_payload()})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request for %s %s", request.method, request.url.path)
    return error_response("Invalid request body", 400, code="validation_error")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    if exc.status_code == 404:
        message = "Route not found"
    return error_response(message, exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    settings = getattr(request.app.state, "settings", None)
    detail = None
    if settings is not None and settings.is_development:
        detail = f"{type(exc).__name__}: {exc}"
    return error_response(INTERNAL_ERROR_MESSAGE, 500, detail=detail)


# Helper to register all handlers on an app (called from create_app)
def register_exception_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
