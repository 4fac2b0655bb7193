"""API Error Translation - exceptions to the uniform error body"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from domain.exceptions import HotelError

logger = logging.getLogger(__name__)

# request parts FastAPI prefixes to error locations
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def error_response(
    request: Request,
    status: int,
    error: str,
    message: str,
    errors: Optional[List[str]] = None
) -> JSONResponse:
    body = ErrorResponse(
        status=status,
        error=error,
        message=message,
        path=request.url.path,
        errors=errors
    )
    return JSONResponse(status_code=status, content=jsonable_encoder(body, exclude_none=True))


def _field_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_ROOTS]
        field = ".".join(loc) or "request"
        messages.append(f"{field}: {err.get('msg')}")
    return messages


async def handle_hotel_error(request: Request, exc: HotelError) -> JSONResponse:
    return error_response(request, exc.status_code, exc.error, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        request,
        400,
        "Validation Failed",
        "Invalid input data",
        errors=_field_errors(exc)
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    return error_response(request, 400, "Bad Request", str(exc) or "Invalid argument")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        request,
        500,
        "Internal Server Error",
        str(exc) or "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HotelError, handle_hotel_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
