"""API errors, status mapping and validation helpers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from app.errors import (
    AnalyticsError,
    ComputeFailureError,
    InvalidSubjectError,
    NotFoundError,
    ValidationError,
)
from app.models.analytics import MAX_SUBJECT_ID, AnalyticsSubject, SubjectKind

# Every AnalyticsError subclass resolves through its MRO to one of these
ERROR_STATUS: dict[type[AnalyticsError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ComputeFailureError: 500,
    AnalyticsError: 500,
}


_MAX_ID_DIGITS = len(str(MAX_SUBJECT_ID))


def status_for(exc: AnalyticsError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def parse_subject(raw_id: str, kind: SubjectKind) -> AnalyticsSubject:
    """Path id -> subject. Only plain decimal integers in 1..MAX_SUBJECT_ID are accepted."""
    raw = raw_id.strip()
    digits = raw.lstrip("0")
    if not (raw.isascii() and raw.isdigit()) or len(digits) > _MAX_ID_DIGITS:
        raise InvalidSubjectError(f"Invalid {kind.value} ID")
    if not 1 <= int(digits or "0") <= MAX_SUBJECT_ID:
        raise InvalidSubjectError(f"Invalid {kind.value} ID")
    return AnalyticsSubject(kind, int(digits))


def _analytics_error_handler(request: Request, exc: AnalyticsError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": ValidationError.code,
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "INTERNAL_ERROR", "message": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalyticsError, _analytics_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
