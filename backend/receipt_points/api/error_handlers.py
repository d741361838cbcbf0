"""
Custom exception handlers for FastAPI.
Translate receipt and storage errors into HTTP responses with clear,
actionable messages. Invalid input is a 400, unknown ids are a 404 and
anything else is a 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from receipt_points.core.exceptions import InvalidReceiptFieldError, RecordNotFoundError
from receipt_points.core.observability import sentry_capture

logger = logging.getLogger(__name__)

INVALID_RECEIPT_MESSAGE = "The receipt is invalid."
NOT_FOUND_MESSAGE = "No receipt found for that ID."


def invalid_field_handler(request: Request, exc: InvalidReceiptFieldError):
    logger.info("Rejected receipt on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": INVALID_RECEIPT_MESSAGE,
            "field": exc.field,
            "details": str(exc),
        },
    )


def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    logger.info("Lookup miss on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=HTTP_404_NOT_FOUND,
        content={
            "error": NOT_FOUND_MESSAGE,
            "details": str(exc),
        },
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": INVALID_RECEIPT_MESSAGE,
            "details": jsonable_encoder(exc.errors()),
        },
    )


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    sentry_capture(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidReceiptFieldError, invalid_field_handler)
    app.add_exception_handler(RecordNotFoundError, record_not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
