import logging
from datetime import datetime
from typing import Any, Optional, Union

from registrar.core import config
from registrar.core.errors import CascadeFailure, NotFound, RejectionReason, ValidationRejection
from registrar.core.ids import new_id, utcnow
from registrar.schemas.assignment import AssignmentCreate, AssignmentRead, AssignmentUpdate, Question
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

EDITABLE_QUESTION_FIELDS = {"text", "options", "correct_answer"}
NON_NULLABLE_UPDATE_FIELDS = ("type", "show_results", "questions", "max_score")


# Question list editing. These never touch the store: the form keeps the
# list in memory and hands the final version to create/update.


def add_blank_question(questions: list[Question]) -> list[Question]:
    blank = Question(
        id=new_id(),
        text="",
        options=[""] * config.MCQ_OPTION_SLOTS,
        correct_answer="",
    )
    return [q.model_copy(deep=True) for q in questions] + [blank]


def remove_question(questions: list[Question], index: int) -> list[Question]:
    if not 0 <= index < len(questions):
        raise IndexError(f"question index out of range: {index}")
    return [q.model_copy(deep=True) for i, q in enumerate(questions) if i != index]


def edit_question(questions: list[Question], index: int, field: str, value: Any) -> list[Question]:
    if not 0 <= index < len(questions):
        raise IndexError(f"question index out of range: {index}")
    if field not in EDITABLE_QUESTION_FIELDS:
        raise ValueError(f"not an editable question field: {field}")

    if field == "options":
        value = list(value)
    edited = [q.model_copy(deep=True) for q in questions]
    edited[index] = Question.model_validate({**edited[index].model_dump(), field: value})
    return edited


def _resolve_title(value: Optional[str]) -> str:
    title = (value or "").strip()
    if not title:
        raise ValidationRejection(RejectionReason.MISSING_FIELD, "Title is required")
    return title


def _resolve_deadline(value: Union[datetime, str, None]) -> datetime:
    if isinstance(value, datetime):
        return value
    if value is None or not value.strip():
        raise ValidationRejection(RejectionReason.MISSING_FIELD, "Deadline is required")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationRejection(
            RejectionReason.INVALID_DEADLINE,
            f"Deadline is not a valid timestamp: {value!r}",
        )


def _owned_questions(questions: list[Question]) -> list[dict]:
    # deep copies, so the stored assignment shares nothing with the caller;
    # a repeated id is replaced so every answer keeps its own key
    owned = []
    seen = set()
    for q in questions:
        qid = q.id if q.id and q.id not in seen else new_id()
        seen.add(qid)
        owned.append(q.model_copy(update={"id": qid}, deep=True).model_dump())
    return owned


class AssignmentLifecycle:
    def __init__(self, store: EntityStore):
        self.store = store

    def _find(self, assignment_id: str) -> Optional[AssignmentRead]:
        return next((a for a in self.store.list_assignments() if a.id == assignment_id), None)

    def list_for_course(self, course_id: str, semester_id: str) -> list[AssignmentRead]:
        return [
            a
            for a in self.store.list_assignments()
            if a.course_id == course_id and a.semester_id == semester_id
        ]

    def create(self, course_id: str, semester_id: str, fields: AssignmentCreate) -> AssignmentRead:
        title = _resolve_title(fields.title)
        deadline = _resolve_deadline(fields.deadline)

        with self.store.transaction():
            if not any(c.id == course_id for c in self.store.list_courses()):
                raise NotFound("Course", course_id)

            assignment = AssignmentRead.model_validate(
                {
                    "id": new_id(),
                    "course_id": course_id,
                    "semester_id": semester_id,
                    "title": title,
                    "subtitle": fields.subtitle,
                    "type": fields.type,
                    "deadline": deadline,
                    "questions": _owned_questions(fields.questions),
                    "show_results": fields.show_results,
                    "max_score": fields.max_score or config.DEFAULT_MAX_SCORE,
                    "created_at": utcnow(),
                }
            )
            self.store.upsert_assignment(assignment)

        logger.info("created %s assignment %s for course %s", assignment.type, assignment.id, course_id)
        return assignment

    def update(self, assignment_id: str, fields: AssignmentUpdate) -> AssignmentRead:
        changes = fields.model_dump(exclude_unset=True)
        # an explicit null on a non-nullable field leaves it unchanged
        for key in NON_NULLABLE_UPDATE_FIELDS:
            if key in changes and changes[key] is None:
                del changes[key]
        if "title" in changes:
            changes["title"] = _resolve_title(changes["title"])
        if "deadline" in changes:
            changes["deadline"] = _resolve_deadline(changes["deadline"])
        if "questions" in changes:
            changes["questions"] = _owned_questions(fields.questions)

        with self.store.transaction():
            current = self._find(assignment_id)
            if current is None:
                raise NotFound("Assignment", assignment_id)

            # id, course, semester and creation time always come from the stored record
            merged = {**current.model_dump(), **changes}
            for key in ("id", "course_id", "semester_id", "created_at"):
                merged[key] = getattr(current, key)
            updated = AssignmentRead.model_validate(merged)
            self.store.upsert_assignment(updated)

        return updated

    def delete(self, assignment_id: str) -> int:
        """Delete an assignment and its submissions. Returns the number of
        submissions removed with it."""
        with self.store.transaction():
            if self._find(assignment_id) is None:
                raise NotFound("Assignment", assignment_id)

            submissions = self.store.list_submissions()
            remaining = [s for s in submissions if s.assignment_id != assignment_id]

            self.store.remove_assignment(assignment_id)
            self.store.replace_submissions(remaining)

            if any(s.assignment_id == assignment_id for s in self.store.list_submissions()):
                raise CascadeFailure(f"submissions still reference assignment {assignment_id}")

        removed = len(submissions) - len(remaining)
        logger.info("deleted assignment %s with %d submission(s)", assignment_id, removed)
        return removed
