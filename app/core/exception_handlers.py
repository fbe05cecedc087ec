"""Exception handlers: every failure leaves the API as the same JSON body.

Body shape: {"success": false, "error": <code>, "message": ..., "details": {...}}.
Domain errors carry their code; status_for maps the code to an HTTP status.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import DocLedgerException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "DUPLICATE_DOCUMENT": 409,
    "DOCUMENT_NOT_FOUND": 404,
    "LEDGER_UNAVAILABLE": 503,
    "LEDGER_TIMEOUT": 504,
    "LEDGER_WRITE_ERROR": 502,
    "CRYPTO_ERROR": 500,
    "INTEGRITY_ERROR": 422,
    "STORAGE_NOT_FOUND": 404,
    "STORAGE_PERMISSION_ERROR": 400,
}


def status_for(error_code: str) -> int:
    """HTTP status for a domain error code; unknown codes are server errors."""
    return _ERROR_CODE_STATUS.get(error_code, 500)


def _error_response(
    status: int, error: str, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "success": False,
            "error": error,
            "message": message,
            "details": details or {},
        },
    )


def _doc_ledger_exception_handler(
    request: Request, exc: DocLedgerException
) -> JSONResponse:
    status = status_for(exc.error_code)
    if status >= 500:
        logger.error(
            "%s %s failed: %s %s", request.method, request.url.path, exc.error_code, exc.details
        )
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.error_code)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or malformed form fields are InvalidInput (400), not 422."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or None,
            "message": err.get("msg", "invalid value"),
        }
        for err in exc.errors()
    ]
    return _error_response(
        400, "VALIDATION_ERROR", "Request validation failed", {"errors": errors}
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 without internals unless debug is on."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for domain, validation, HTTP and unexpected errors."""
    app.add_exception_handler(DocLedgerException, _doc_ledger_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
