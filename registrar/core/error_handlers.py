import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from registrar.core.errors import (
    CascadeFailure,
    NotFound,
    RejectionReason,
    StoreUnavailable,
    ValidationRejection,
)

logger = logging.getLogger(__name__)

# rule conflicts with existing records; everything else is a bad field
CONFLICT_REASONS = {
    RejectionReason.QUOTA_EXCEEDED,
    RejectionReason.DUPLICATE_IN_SEMESTER,
    RejectionReason.ALREADY_TAKEN_PREVIOUS_SEMESTER,
    RejectionReason.REGISTRATION_CLOSED,
    RejectionReason.DUPLICATE_SUBMISSION,
    RejectionReason.DUPLICATE_SEMESTER_NAME,
}


async def validation_rejection_handler(request: Request, exc: ValidationRejection):
    code = (
        status.HTTP_409_CONFLICT
        if exc.reason in CONFLICT_REASONS
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return JSONResponse(status_code=code, content={"detail": exc.detail, "reason": exc.reason.value})


async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"{exc.entity} not found", "id": exc.entity_id},
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


async def cascade_failure_handler(request: Request, exc: CascadeFailure):
    logger.error("cascade failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Delete did not complete"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationRejection, validation_rejection_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(CascadeFailure, cascade_failure_handler)
