"""Exception handlers that render every failure as {"error": "<message>"}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.errors import ExhaustedKeyspaceError

logger = logging.getLogger("shortlink.web")


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    """Build the uniform JSON error body."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def validation_message(exc: RequestValidationError) -> str:
    """Collapse pydantic validation errors into one client-facing message."""
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid" or loc == ("body",):
            return "invalid json"
    
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "invalid request")
    return f"{field}: {message}" if field else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(exc)
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def keyspace_exception_handler(request: Request, exc: ExhaustedKeyspaceError) -> JSONResponse:
    logger.error(f"Short code keyspace exhausted: {exc}")
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ExhaustedKeyspaceError, keyspace_exception_handler)
