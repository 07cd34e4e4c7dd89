"""
Enrollment rule engine.

A request is checked in a fixed order and the first failing rule wins:

1. registration gate (self-service only): registration open, course open
2. quota: fewer than ``max_per_semester`` enrollments in the semester
3. duplicate: no course with the same code already held in the semester
4. retake: no course with the same code held in another semester,
   as filtered by the retake policy

Records written before semesters existed carry no semester id; they count
towards the sentinel ``DEFAULT_SEMESTER_ID``.
"""
import logging
from enum import Enum
from typing import Optional

from registrar.core import config
from registrar.core.errors import EnrollmentRejected, NotFound, RejectionReason
from registrar.core.ids import new_id, utcnow
from registrar.core.permissions import ActorRole
from registrar.schemas.course import CourseRead
from registrar.schemas.enrollment import EnrollmentRead
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

REJECTION_MESSAGES = {
    RejectionReason.QUOTA_EXCEEDED: "Maximum {quota} courses per semester reached for this student",
    RejectionReason.DUPLICATE_IN_SEMESTER: "Already enrolled in this course for this semester",
    RejectionReason.ALREADY_TAKEN_PREVIOUS_SEMESTER: "This student already took this course in a previous semester",
    RejectionReason.REGISTRATION_CLOSED: "Registration is closed for this course",
}


class RetakePolicy(str, Enum):
    BLOCK_ANY = "block_any"  # any earlier enrollment blocks a retake
    BLOCK_PASSED = "block_passed"  # only a passed earlier enrollment blocks
    ALLOW = "allow"


def effective_semester(semester_id: Optional[str]) -> str:
    return semester_id or config.DEFAULT_SEMESTER_ID


class EnrollmentRuleEngine:
    def __init__(
        self,
        store: EntityStore,
        max_per_semester: int = config.MAX_ENROLLMENTS_PER_SEMESTER,
        retake_policy: RetakePolicy | str = config.RETAKE_POLICY,
    ):
        self.store = store
        self.max_per_semester = max_per_semester
        self.retake_policy = RetakePolicy(retake_policy)

    def _blocks_retake(self, prior: EnrollmentRead) -> bool:
        if self.retake_policy is RetakePolicy.ALLOW:
            return False
        if self.retake_policy is RetakePolicy.BLOCK_PASSED:
            return prior.outcome == "passed"
        return True

    def _resolve_course(self, course_id: str, courses: list[CourseRead]) -> CourseRead:
        for c in courses:
            if c.id == course_id:
                return c
        raise NotFound("Course", course_id)

    def evaluate(
        self,
        student_id: str,
        course_id: str,
        semester_id: Optional[str],
        actor_role: ActorRole | str = ActorRole.ADMIN,
    ) -> Optional[RejectionReason]:
        """Run every rule without writing. Returns the first failing reason."""
        courses = self.store.list_courses()
        course = self._resolve_course(course_id, courses)
        if not any(u.id == student_id for u in self.store.list_users()):
            raise NotFound("User", student_id)

        if ActorRole(actor_role) is ActorRole.STUDENT:
            settings = self.store.get_settings()
            if settings.registration_status == "closed" or not course.is_registration_enabled:
                return RejectionReason.REGISTRATION_CLOSED

        target = effective_semester(semester_id)
        code_by_course = {c.id: c.code for c in courses}
        mine = [e for e in self.store.list_enrollments() if e.student_id == student_id]

        this_semester = [e for e in mine if effective_semester(e.semester_id) == target]
        if len(this_semester) >= self.max_per_semester:
            return RejectionReason.QUOTA_EXCEEDED

        if any(code_by_course.get(e.course_id) == course.code for e in this_semester):
            return RejectionReason.DUPLICATE_IN_SEMESTER

        for e in mine:
            if effective_semester(e.semester_id) == target:
                continue
            if code_by_course.get(e.course_id) == course.code and self._blocks_retake(e):
                return RejectionReason.ALREADY_TAKEN_PREVIOUS_SEMESTER

        return None

    def _reject(self, reason: RejectionReason, student_id: str, course_id: str):
        logger.warning("enrollment rejected (%s): student=%s course=%s", reason.value, student_id, course_id)
        message = REJECTION_MESSAGES[reason].format(quota=self.max_per_semester)
        raise EnrollmentRejected(reason, message)

    def enroll(
        self,
        student_id: str,
        course_id: str,
        semester_id: Optional[str],
        actor_role: ActorRole | str = ActorRole.ADMIN,
    ) -> EnrollmentRead:
        with self.store.transaction():
            reason = self.evaluate(student_id, course_id, semester_id, actor_role)
            if reason is not None:
                self._reject(reason, student_id, course_id)

            enrollment = EnrollmentRead(
                id=new_id(),
                student_id=student_id,
                course_id=course_id,
                semester_id=effective_semester(semester_id),
                enrolled_at=utcnow(),
            )
            if not self.store.append_enrollment_within_quota(enrollment, self.max_per_semester):
                # another writer filled the last seat after our read
                self._reject(RejectionReason.QUOTA_EXCEEDED, student_id, course_id)

        logger.info(
            "enrolled student=%s course=%s semester=%s",
            student_id,
            course_id,
            enrollment.semester_id,
        )
        return enrollment

    def unenroll(self, enrollment_id: str) -> list[EnrollmentRead]:
        with self.store.transaction():
            if not any(e.id == enrollment_id for e in self.store.list_enrollments()):
                raise NotFound("Enrollment", enrollment_id)
            remaining = self.store.remove_enrollment(enrollment_id)

        logger.info("removed enrollment %s", enrollment_id)
        return remaining

    def record_outcome(self, enrollment_id: str, outcome: Optional[str]) -> EnrollmentRead:
        with self.store.transaction():
            enrollments = self.store.list_enrollments()
            current = next((e for e in enrollments if e.id == enrollment_id), None)
            if current is None:
                raise NotFound("Enrollment", enrollment_id)

            updated = current.model_copy(update={"outcome": outcome})
            self.store.replace_enrollments(
                [updated if e.id == enrollment_id else e for e in enrollments]
            )

        return updated
