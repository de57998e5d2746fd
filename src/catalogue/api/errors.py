"""Translation of internal errors into HTTP responses.

``error_response`` is the single place where exceptions become status codes;
``register_error_handlers`` installs it on a FastAPI application.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalogue.api.schemas import ApiResponse
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


def _describe(messages, with_fields: bool = False) -> str:
    if not isinstance(messages, dict):
        return str(messages)

    parts = []
    for field, errors in messages.items():
        for error in errors if isinstance(errors, list | tuple) else [errors]:
            parts.append(f"{field}: {error}" if with_fields else str(error))
    return "; ".join(parts)


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "header"))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def error_response(exc: Exception) -> JSONResponse:
    """Map an exception to an error envelope and its HTTP status."""
    if isinstance(exc, ObjectNotFoundError):
        status_code, message = 404, _describe(getattr(exc, "messages", str(exc)))
    elif isinstance(exc, ValidationError):
        status_code, message = 400, _describe(getattr(exc, "messages", str(exc)), with_fields=True)
    elif isinstance(exc, RequestValidationError):
        status_code, message = 422, _describe_request_errors(exc)
    elif isinstance(exc, StarletteHTTPException):
        status_code, message = exc.status_code, str(exc.detail)
    else:
        logger.exception("Unhandled error", error_type=type(exc).__name__)
        status_code, message = 500, "Internal Server Error"

    body = ApiResponse(success=False, message=message, data=None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        logger.warning("Request failed", method=request.method, path=request.url.path, error=type(exc).__name__)
    return error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    for exc_class in (ObjectNotFoundError, ValidationError, RequestValidationError, StarletteHTTPException, Exception):
        app.add_exception_handler(exc_class, _handle)
