"""Error Handlers — turn NetBridgeError into the inspection API's error envelope.

Invariants:
    - Every 4xx body comes from NetBridgeError.to_response(); there is one envelope
    - Missing or malformed query parameters surface as InvalidRequestError
      (VALIDATION_ERROR) with per-field details
    - Log level follows the error's severity; the log record carries the
      error's address, endpoint key and room

Design Decisions:
    - No catch-all handler: registry reads cannot fail, and FastAPI's default
      500 response already hides internals
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from netbridge.core.errors import ErrorSeverity, InvalidRequestError, NetBridgeError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NetBridgeError, netbridge_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def error_response(request: Request, exc: NetBridgeError) -> JSONResponse:
    """Log exc with its registry context and render the error envelope."""
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={**exc.log_extra(), "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def netbridge_error_handler(request: Request, exc: NetBridgeError):
    return error_response(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return error_response(request, InvalidRequestError(details))
