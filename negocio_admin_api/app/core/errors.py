"""
Exception handlers that shape error responses.

* Request validation failures become ``400`` responses listing each
  offending field with its message.
* ``HTTPException`` raised by endpoints (``404`` for unknown ids) keeps
  FastAPI's ``{"detail": ...}`` body.
* Anything else is logged with its traceback and answered with a
  generic ``500`` that leaks no internals.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    details = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix; keep the field path.
        location = [str(part) for part in error.get("loc", ())[1:]]
        details.append({"field": ".".join(location) or None, "message": error.get("msg", "Invalid value")})
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _field_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
