"""Error taxonomy and the handlers that render it as ``{"message": ...}``."""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# HTTP_422_UNPROCESSABLE_CONTENT in current Starlette, _ENTITY in older releases
HTTP_422 = 422


class ValidationError(HTTPException):
    """Missing, malformed or oversized input."""

    def __init__(self, detail: str = "Please fill in all fields"):
        super().__init__(status_code=HTTP_422, detail=detail)


class Unauthenticated(HTTPException):
    """Missing or invalid token, or bad credentials."""

    def __init__(self, detail: str = "Not authorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Not allowed"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    """Duplicate unique value, reported with the validation status code."""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=HTTP_422, detail=detail)


class InternalError(HTTPException):
    def __init__(self, detail: str = "Internal Server Error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _message_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched route, including a known path with an unsupported method
    if (exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found") or (
        exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    ):
        return _message_response(
            status.HTTP_404_NOT_FOUND, f"Not Found - {request.url.path}"
        )
    return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return _message_response(HTTP_422, "Invalid request")

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path"))
    message = first.get("msg", "Invalid value")
    if field:
        message = f"Invalid {field}: {message}"
    return _message_response(HTTP_422, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through the ``{"message": ...}`` response shape."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
