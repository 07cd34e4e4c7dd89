"""
Domain errors raised by the rules engine.

Routers never build these by hand; the handlers registered in
``registrar.main`` turn them into JSON responses.
"""
from enum import Enum


class RejectionReason(str, Enum):
    QUOTA_EXCEEDED = "QuotaExceeded"
    DUPLICATE_IN_SEMESTER = "DuplicateInSemester"
    ALREADY_TAKEN_PREVIOUS_SEMESTER = "AlreadyTakenPreviousSemester"
    REGISTRATION_CLOSED = "RegistrationClosed"
    MISSING_FIELD = "MissingField"
    INVALID_DEADLINE = "InvalidDeadline"
    SAME_SEMESTER = "SameSemester"
    NOT_AUTO_GRADABLE = "NotAutoGradable"
    DUPLICATE_SUBMISSION = "DuplicateSubmission"
    DUPLICATE_SEMESTER_NAME = "DuplicateSemesterName"


class RegistrarError(Exception):
    """Base class for every error the engine raises on purpose."""


class ValidationRejection(RegistrarError):
    def __init__(self, reason: RejectionReason, detail: str | None = None):
        self.reason = reason
        self.detail = detail or reason.value
        super().__init__(self.detail)


class EnrollmentRejected(ValidationRejection):
    pass


class NotFound(RegistrarError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class CascadeFailure(RegistrarError):
    pass


class StoreUnavailable(RegistrarError):
    pass
