# app/core/error_handlers.py
#
# Every failure leaves the API in the same envelope:
#   {"success": false, "message": ..., "error_code": ..., "details": ...}

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException

logger = logging.getLogger(__name__)

STATUS_ERROR_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.IMPORT_FILE_INVALID,
    422: ErrorCode.VALIDATION_ERROR,
}


def error_response(
    status_code: int,
    message: str,
    error_code: ErrorCode,
    details=None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error_code": error_code,
            "details": details,
        },
    )


def _first_error_message(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request data"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request data")


# -------------------------
# HANDLERS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.warning(
            exc.detail,
            extra={"path": request.url.path, "error_code": exc.error_code.value},
        )
    return error_response(exc.status_code, exc.detail, exc.error_code, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    return error_response(
        422, _first_error_message(errors), ErrorCode.VALIDATION_ERROR, errors
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error_code = STATUS_ERROR_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return error_response(exc.status_code, exc.detail, error_code)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.exception("Document write violated a constraint", extra={"path": request.url.path})
    return error_response(409, "Document already exists", ErrorCode.CONFLICT)


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # the failed commit was rolled back; nothing partial is left behind
    logger.exception(
        "Document store unavailable",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        503,
        "Storage is unavailable. Nothing was changed, please retry.",
        ErrorCode.STORAGE_ERROR,
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        500, "Something went wrong. Please try again.", ErrorCode.INTERNAL_ERROR
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
