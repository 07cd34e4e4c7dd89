"""
Storage contract consumed by the rules engine.

Every ``list_*`` call returns a fresh snapshot of immutable read models; the
engine builds new values and writes them back through the mutators below.
"""
from contextlib import AbstractContextManager
from typing import Protocol

from registrar.schemas.assignment import AssignmentRead
from registrar.schemas.course import CourseRead
from registrar.schemas.enrollment import EnrollmentRead
from registrar.schemas.semester import SemesterRead
from registrar.schemas.settings import SettingsRead
from registrar.schemas.submission import SubmissionRead
from registrar.schemas.user import UserRead


class EntityStore(Protocol):
    def transaction(self) -> AbstractContextManager["EntityStore"]:
        """Commit everything written inside the block, or nothing."""
        ...

    # reads
    def list_users(self) -> list[UserRead]: ...
    def list_semesters(self) -> list[SemesterRead]: ...
    def list_courses(self) -> list[CourseRead]: ...
    def list_enrollments(self) -> list[EnrollmentRead]: ...
    def list_assignments(self) -> list[AssignmentRead]: ...
    def list_submissions(self) -> list[SubmissionRead]: ...
    def get_settings(self) -> SettingsRead: ...

    # writes
    def save_settings(self, settings: SettingsRead) -> None: ...
    def upsert_semester(self, semester: SemesterRead) -> None: ...

    def append_enrollment(self, enrollment: EnrollmentRead) -> None: ...

    def append_enrollment_within_quota(self, enrollment: EnrollmentRead, quota: int) -> bool:
        """Insert only while the student holds fewer than ``quota`` enrollments
        in the enrollment's semester. Returns False when nothing was written."""
        ...

    def remove_enrollment(self, enrollment_id: str) -> list[EnrollmentRead]: ...
    def replace_enrollments(self, enrollments: list[EnrollmentRead]) -> None: ...

    def append_courses(self, courses: list[CourseRead]) -> None: ...
    def replace_courses(self, courses: list[CourseRead]) -> None: ...

    def upsert_assignment(self, assignment: AssignmentRead) -> None: ...
    def remove_assignment(self, assignment_id: str) -> None: ...

    def append_submission(self, submission: SubmissionRead) -> None: ...
    def replace_submissions(self, submissions: list[SubmissionRead]) -> None: ...
