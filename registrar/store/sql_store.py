import functools
import logging
from contextlib import contextmanager

from sqlalchemy import DateTime, String, delete, func, insert, literal, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from registrar.core.config import DEFAULT_SEMESTER_ID
from registrar.core.errors import StoreUnavailable
from registrar.models.assignment import Assignment
from registrar.models.course import Course
from registrar.models.enrollment import Enrollment
from registrar.models.semester import Semester
from registrar.models.settings import SiteSettings
from registrar.models.submission import Submission
from registrar.models.user import User
from registrar.schemas.assignment import AssignmentRead
from registrar.schemas.course import CourseRead
from registrar.schemas.enrollment import EnrollmentRead
from registrar.schemas.semester import SemesterRead
from registrar.schemas.settings import SettingsRead
from registrar.schemas.submission import SubmissionRead
from registrar.schemas.user import UserRead

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


def _store_call(fn):
    """Surface driver-level connectivity failures as StoreUnavailable."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("store call %s failed: %s", fn.__name__, exc)
            raise StoreUnavailable(str(exc)) from exc

    return wrapper


class SqlEntityStore:
    """EntityStore backed by one SQLAlchemy session.

    Writes are flushed immediately but only committed when the enclosing
    ``transaction()`` block exits cleanly.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.db.commit()
        except (OperationalError, InterfaceError) as exc:
            self.db.rollback()
            raise StoreUnavailable(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise

    # reads

    def _all(self, model, read_model, *order_by):
        rows = self.db.scalars(select(model).order_by(*order_by)).all()
        return [read_model.model_validate(row) for row in rows]

    @_store_call
    def list_users(self) -> list[UserRead]:
        return self._all(User, UserRead, User.email.asc())

    @_store_call
    def list_semesters(self) -> list[SemesterRead]:
        return self._all(Semester, SemesterRead, Semester.created_at.asc(), Semester.id.asc())

    @_store_call
    def list_courses(self) -> list[CourseRead]:
        return self._all(Course, CourseRead, Course.code.asc(), Course.id.asc())

    @_store_call
    def list_enrollments(self) -> list[EnrollmentRead]:
        return self._all(Enrollment, EnrollmentRead, Enrollment.enrolled_at.asc(), Enrollment.id.asc())

    @_store_call
    def list_assignments(self) -> list[AssignmentRead]:
        return self._all(Assignment, AssignmentRead, Assignment.created_at.asc(), Assignment.id.asc())

    @_store_call
    def list_submissions(self) -> list[SubmissionRead]:
        return self._all(Submission, SubmissionRead, Submission.submitted_at.asc(), Submission.id.asc())

    @_store_call
    def get_settings(self) -> SettingsRead:
        row = self.db.get(SiteSettings, SETTINGS_ROW_ID)
        if row is None:
            return SettingsRead()
        return SettingsRead.model_validate(row)

    # writes

    def _replace(self, model, items) -> None:
        keep = [item.id for item in items]
        self.db.execute(
            delete(model)
            .where(model.id.not_in(keep))
            .execution_options(synchronize_session="fetch")
        )
        for item in items:
            self.db.merge(model(**item.model_dump()))
        self.db.flush()

    @_store_call
    def save_settings(self, settings: SettingsRead) -> None:
        self.db.merge(SiteSettings(id=SETTINGS_ROW_ID, **settings.model_dump()))
        self.db.flush()

    @_store_call
    def upsert_semester(self, semester: SemesterRead) -> None:
        self.db.merge(Semester(**semester.model_dump()))
        self.db.flush()

    @_store_call
    def append_enrollment(self, enrollment: EnrollmentRead) -> None:
        self.db.add(Enrollment(**enrollment.model_dump()))
        self.db.flush()

    @_store_call
    def append_enrollment_within_quota(self, enrollment: EnrollmentRead, quota: int) -> bool:
        # one INSERT ... SELECT ... WHERE count < quota, so two writers cannot
        # both squeeze past the check
        table = Enrollment.__table__
        effective_semester = func.coalesce(table.c.semester_id, DEFAULT_SEMESTER_ID)
        held = (
            select(func.count())
            .select_from(table)
            .where(
                table.c.student_id == enrollment.student_id,
                effective_semester == enrollment.semester_id,
            )
            .correlate(None)
            .scalar_subquery()
        )
        row = select(
            literal(enrollment.id, String),
            literal(enrollment.student_id, String),
            literal(enrollment.course_id, String),
            literal(enrollment.semester_id, String),
            literal(enrollment.enrolled_at, DateTime(timezone=True)),
        ).where(held < quota)
        result = self.db.execute(
            insert(table).from_select(
                ["id", "student_id", "course_id", "semester_id", "enrolled_at"], row
            )
        )
        self.db.flush()
        return result.rowcount == 1

    @_store_call
    def remove_enrollment(self, enrollment_id: str) -> list[EnrollmentRead]:
        self.db.execute(
            delete(Enrollment)
            .where(Enrollment.id == enrollment_id)
            .execution_options(synchronize_session="fetch")
        )
        self.db.flush()
        return self.list_enrollments()

    @_store_call
    def replace_enrollments(self, enrollments: list[EnrollmentRead]) -> None:
        self._replace(Enrollment, enrollments)

    @_store_call
    def append_courses(self, courses: list[CourseRead]) -> None:
        self.db.add_all([Course(**c.model_dump()) for c in courses])
        self.db.flush()

    @_store_call
    def replace_courses(self, courses: list[CourseRead]) -> None:
        self._replace(Course, courses)

    @_store_call
    def upsert_assignment(self, assignment: AssignmentRead) -> None:
        self.db.merge(Assignment(**assignment.model_dump()))
        self.db.flush()

    @_store_call
    def remove_assignment(self, assignment_id: str) -> None:
        self.db.execute(
            delete(Assignment)
            .where(Assignment.id == assignment_id)
            .execution_options(synchronize_session="fetch")
        )
        self.db.flush()

    @_store_call
    def append_submission(self, submission: SubmissionRead) -> None:
        self.db.add(Submission(**submission.model_dump()))
        self.db.flush()

    @_store_call
    def replace_submissions(self, submissions: list[SubmissionRead]) -> None:
        self._replace(Submission, submissions)
