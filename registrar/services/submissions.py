import logging

from registrar.core.errors import NotFound, RejectionReason, ValidationRejection
from registrar.core.ids import new_id, utcnow
from registrar.schemas.assignment import AssignmentType
from registrar.schemas.submission import SubmissionCreate, SubmissionRead
from registrar.services.grading import answers_by_question, calculate_score
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class SubmissionIntake:
    """Records a student's single submission for an assignment."""

    def __init__(self, store: EntityStore):
        self.store = store

    def list_for_assignment(self, assignment_id: str) -> list[SubmissionRead]:
        return [s for s in self.store.list_submissions() if s.assignment_id == assignment_id]

    def submit(self, assignment_id: str, payload: SubmissionCreate) -> SubmissionRead:
        with self.store.transaction():
            assignment = next(
                (a for a in self.store.list_assignments() if a.id == assignment_id), None
            )
            if assignment is None:
                raise NotFound("Assignment", assignment_id)
            if not any(u.id == payload.student_id for u in self.store.list_users()):
                raise NotFound("User", payload.student_id)

            if any(
                s.assignment_id == assignment_id and s.student_id == payload.student_id
                for s in self.store.list_submissions()
            ):
                raise ValidationRejection(
                    RejectionReason.DUPLICATE_SUBMISSION,
                    "Assignment already submitted",
                )

            is_file = assignment.type == AssignmentType.FILE
            answers = {} if is_file else answers_by_question(assignment.questions, payload.answers)
            grade = None
            if assignment.type == AssignmentType.MCQ:
                grade = calculate_score(assignment.questions, answers)

            submission = SubmissionRead(
                id=new_id(),
                assignment_id=assignment_id,
                student_id=payload.student_id,
                course_id=assignment.course_id,
                submitted_at=utcnow(),
                answers=answers,
                file_name=payload.file_name if is_file else None,
                file_data=payload.file_data if is_file else None,
                grade=grade,
            )
            self.store.append_submission(submission)

        logger.info("student %s submitted assignment %s", payload.student_id, assignment_id)
        return submission
