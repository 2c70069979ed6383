"""Exception handling utilities."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("parts_agent.errors")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Translate request validation failures into a structured 400 payload."""

    logger.info("Rejected malformed request on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request format",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return a generic JSON error response while logging the exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Something unexpected happened. Please try again later.",
        },
    )
