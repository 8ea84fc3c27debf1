"""
Error responses for the sandwich tracker API.

Every failure response carries a stable "message" field. Request
validation failures are client errors (400) and also carry a short
"errors" list describing what was rejected.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

DEFAULT_VALIDATION_MESSAGE = "Invalid request data"


def validation_message(errors: list[dict[str, Any]]) -> str:
    """Use the first message raised by one of our own validators, if any."""
    for error in errors:
        if error.get("type") == "value_error":
            cause = error.get("ctx", {}).get("error")
            if cause is not None and str(cause):
                return str(cause)
    return DEFAULT_VALIDATION_MESSAGE


def _summarize(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{"loc": [str(part) for part in error.get("loc", ())], "msg": str(error.get("msg", ""))} for error in errors]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    message = validation_message(errors)
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"message": message, "errors": _summarize(errors)})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the message-shaped error handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
