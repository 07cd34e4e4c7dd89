"""
Grading engine.

Grades are opaque display strings ("18/20"); nothing here parses them back.
Operations that target ids which do not resolve are silent no-ops: check
``GradingResult.count`` to tell "nothing matched" from "graded".
"""
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from registrar.core import config
from registrar.core.errors import RejectionReason, ValidationRejection
from registrar.schemas.assignment import AssignmentType, Question
from registrar.schemas.grading import GradingResult
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

Answers = Union[Mapping[str, str], Sequence[str], None]


def answers_by_question(questions: list[Question], answers: Answers) -> dict[str, str]:
    """Key answers by question id. A plain list is read positionally."""
    if not answers:
        return {}
    if isinstance(answers, Mapping):
        return dict(answers)
    return {q.id: a for q, a in zip(questions, answers) if q.id is not None}


def _answer_for(index: int, question: Question, answers: Answers) -> Optional[str]:
    if not answers:
        return None
    if isinstance(answers, Mapping):
        return answers.get(question.id)
    return answers[index] if index < len(answers) else None


def calculate_score(questions: list[Question], answers: Answers) -> str:
    """Score an MCQ answer set as "{correct}/{question count}".

    Matching is exact and case-sensitive. A question without a correct
    answer never scores but still counts in the denominator.
    """
    score = 0
    for index, q in enumerate(questions):
        if q.correct_answer and _answer_for(index, q, answers) == q.correct_answer:
            score += 1
    return f"{score}/{len(questions)}"


def full_marks_grade(max_score: int) -> str:
    return f"{max_score}/{max_score}"


class GradingEngine:
    def __init__(self, store: EntityStore):
        self.store = store

    def _apply(self, grades: Mapping[str, str]) -> GradingResult:
        submissions = self.store.list_submissions()
        updated = [s.id for s in submissions if s.id in grades]
        if updated:
            self.store.replace_submissions(
                [
                    s.model_copy(update={"grade": grades[s.id]}) if s.id in grades else s
                    for s in submissions
                ]
            )
        return GradingResult.of(updated)

    def set_grade(self, submission_id: str, grade: str) -> GradingResult:
        with self.store.transaction():
            result = self._apply({submission_id: grade})
        if not result.count:
            logger.info("set_grade: no submission %s", submission_id)
        return result

    def auto_grade_mcq(self, assignment_id: str) -> GradingResult:
        with self.store.transaction():
            assignment = next(
                (a for a in self.store.list_assignments() if a.id == assignment_id), None
            )
            if assignment is None:
                return GradingResult.of([])
            if assignment.type != AssignmentType.MCQ:
                raise ValidationRejection(
                    RejectionReason.NOT_AUTO_GRADABLE,
                    f"Only mcq assignments can be auto-graded (got {assignment.type})",
                )

            grades = {
                s.id: calculate_score(assignment.questions, s.answers)
                for s in self.store.list_submissions()
                if s.assignment_id == assignment_id
            }
            result = self._apply(grades)

        logger.info("auto-graded %d submission(s) for assignment %s", result.count, assignment_id)
        return result

    def bulk_apply_grade(self, submission_ids: Iterable[str], grade: str) -> GradingResult:
        """Write ``grade`` to every id in the set. Only an empty grade is
        skipped; any other string, blanks included, is applied as given."""
        ids = set(submission_ids)
        if not ids or not grade:
            return GradingResult.of([])

        with self.store.transaction():
            result = self._apply({sid: grade for sid in ids})

        logger.info("applied grade %r to %d submission(s)", grade, result.count)
        return result

    def full_marks(self, submission_ids: Iterable[str]) -> GradingResult:
        ids = set(submission_ids)
        if not ids:
            return GradingResult.of([])

        with self.store.transaction():
            max_by_assignment = {a.id: a.max_score for a in self.store.list_assignments()}
            grades = {
                s.id: full_marks_grade(max_by_assignment.get(s.assignment_id, config.DEFAULT_MAX_SCORE))
                for s in self.store.list_submissions()
                if s.id in ids
            }
            result = self._apply(grades)

        return result

    def preview(self, submission_id: str) -> Optional[str]:
        """Score one stored submission without saving it."""
        submission = next((s for s in self.store.list_submissions() if s.id == submission_id), None)
        if submission is None:
            return None
        assignment = next(
            (a for a in self.store.list_assignments() if a.id == submission.assignment_id), None
        )
        if assignment is None:
            return None
        return calculate_score(assignment.questions, submission.answers)
