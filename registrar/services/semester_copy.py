import logging

from registrar.core.errors import RejectionReason, ValidationRejection
from registrar.core.ids import new_id
from registrar.schemas.semester import CopyResult
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class SemesterCopyEngine:
    """Copies a semester's course catalog into another semester.

    Courses are matched by ``code`` only: a source course whose code already
    exists in the target is skipped even if its content has since changed.
    Callers validate that both semesters exist.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def copy_courses(self, source_semester_id: str, target_semester_id: str) -> CopyResult:
        if source_semester_id == target_semester_id:
            raise ValidationRejection(
                RejectionReason.SAME_SEMESTER,
                "Source and target semester must differ",
            )

        with self.store.transaction():
            courses = self.store.list_courses()
            source = [c for c in courses if c.semester_id == source_semester_id]
            target_codes = {c.code for c in courses if c.semester_id == target_semester_id}

            pending = []
            skipped = 0
            for course in source:
                if course.code in target_codes:
                    skipped += 1
                    continue
                pending.append(
                    course.model_copy(update={"id": new_id(), "semester_id": target_semester_id})
                )

            if pending:
                self.store.append_courses(pending)

        logger.info(
            "copied %d course(s) from %s to %s (%d skipped)",
            len(pending),
            source_semester_id,
            target_semester_id,
            skipped,
        )
        return CopyResult(copied=len(pending), skipped=skipped)
