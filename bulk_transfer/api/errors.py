"""HTTP response helpers for outcomes, validation and unexpected errors."""
from __future__ import annotations

import logging
import traceback
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bulk_transfer.core.outcome import Failure, TransferErrorCode
from bulk_transfer.core.settings import get_settings
from bulk_transfer.schemas.transfer import FailureResponse, ValidationErrorResponse, to_field_errors

logger = logging.getLogger(__name__)

FAILURE_STATUS_CODES: dict[TransferErrorCode, int] = {
    TransferErrorCode.INSUFFICIENT_FUND: HTTPStatus.UNPROCESSABLE_ENTITY.value,
}


def failure_status_code(failure: Failure) -> int:
    """Return the HTTP status used for a business failure."""

    return FAILURE_STATUS_CODES.get(failure.error_code, status.HTTP_400_BAD_REQUEST)


def map_failure(failure: Failure) -> JSONResponse:
    """Translate a failed outcome into its JSON response."""

    body = FailureResponse(error_code=str(failure.error_code.value), reason=failure.reason)
    return JSONResponse(status_code=failure_status_code(failure), content=body.model_dump(by_alias=True))


def map_unexpected_error(exc: Exception, include_stack: bool) -> JSONResponse:
    """Generic 400 for exceptions escaping the route handler."""

    content: dict[str, object] = {
        "error": {
            "statusCode": status.HTTP_400_BAD_REQUEST,
            "error": "Bad Request",
            "message": str(exc) or exc.__class__.__name__,
        }
    }
    if include_stack:
        content["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer payload validation errors with 400 and the field error list."""

    body = ValidationErrorResponse(detail=to_field_errors(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer any exception raised outside the route body with the generic 400."""

    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return map_unexpected_error(exc, include_stack=not get_settings().is_production)


def register_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(Exception, unexpected_error_handler)
