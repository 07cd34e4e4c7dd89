from datetime import datetime

import pytest

from registrar.core.errors import NotFound, RejectionReason, ValidationRejection
from registrar.schemas.assignment import AssignmentCreate, AssignmentUpdate, Question
from registrar.schemas.submission import SubmissionCreate
from registrar.services.assignments import (
    AssignmentLifecycle,
    add_blank_question,
    edit_question,
    remove_question,
)
from registrar.services.submissions import SubmissionIntake


def mcq_fields(**overrides):
    data = {
        "title": "Quiz 1",
        "type": "mcq",
        "deadline": "2024-10-01T23:59:00",
        "questions": [
            {"id": "q1", "text": "2+2", "options": ["3", "4"], "correct_answer": "4"},
            {"id": "q2", "text": "3+3", "options": ["6", "7"], "correct_answer": "6"},
        ],
    }
    data.update(overrides)
    return AssignmentCreate(**data)


def test_create_assigns_identity_and_defaults(store, seed):
    course_id = seed.fall_courses["CS101"]

    a = AssignmentLifecycle(store).create(course_id, seed.fall, mcq_fields())

    assert a.id
    assert a.course_id == course_id
    assert a.semester_id == seed.fall
    assert a.type == "mcq"
    assert a.deadline == datetime(2024, 10, 1, 23, 59)
    assert a.max_score == 20
    assert [q.id for q in a.questions] == ["q1", "q2"]
    assert [x.id for x in store.list_assignments()] == [a.id]


def test_create_allows_empty_question_list(store, seed):
    a = AssignmentLifecycle(store).create(seed.fall_courses["CS101"], seed.fall, mcq_fields(questions=[]))
    assert a.questions == []


def test_create_gives_ids_to_new_questions(store, seed):
    a = AssignmentLifecycle(store).create(
        seed.fall_courses["CS101"],
        seed.fall,
        mcq_fields(questions=[{"text": "unnamed", "options": ["a"], "correct_answer": "a"}]),
    )
    assert a.questions[0].id


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"title": ""}, RejectionReason.MISSING_FIELD),
        ({"title": "   "}, RejectionReason.MISSING_FIELD),
        ({"deadline": ""}, RejectionReason.MISSING_FIELD),
        ({"deadline": None}, RejectionReason.MISSING_FIELD),
        ({"deadline": "next friday"}, RejectionReason.INVALID_DEADLINE),
    ],
)
def test_create_rejects_missing_or_bad_fields(store, seed, overrides, reason):
    with pytest.raises(ValidationRejection) as exc:
        AssignmentLifecycle(store).create(seed.fall_courses["CS101"], seed.fall, mcq_fields(**overrides))

    assert exc.value.reason is reason
    assert store.list_assignments() == []


def test_create_for_unknown_course_is_not_found(store, seed):
    with pytest.raises(NotFound):
        AssignmentLifecycle(store).create("nope", seed.fall, mcq_fields())


def test_update_merges_fields_and_keeps_identity(store, seed):
    lifecycle = AssignmentLifecycle(store)
    a = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields())

    updated = lifecycle.update(
        a.id,
        AssignmentUpdate(title="Quiz 1 (revised)", show_results=False, max_score=10),
    )

    assert updated.id == a.id
    assert updated.course_id == a.course_id
    assert updated.semester_id == a.semester_id
    assert updated.title == "Quiz 1 (revised)"
    assert updated.show_results is False
    assert updated.max_score == 10
    # untouched fields survive
    assert updated.questions == a.questions
    assert updated.deadline == a.deadline


def test_update_rejects_blank_title(store, seed):
    lifecycle = AssignmentLifecycle(store)
    a = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields())

    with pytest.raises(ValidationRejection):
        lifecycle.update(a.id, AssignmentUpdate(title=" "))

    assert store.list_assignments()[0].title == "Quiz 1"


def test_update_unknown_assignment_is_not_found(store):
    with pytest.raises(NotFound):
        AssignmentLifecycle(store).update("missing", AssignmentUpdate(title="x"))


def test_delete_cascades_to_submissions(store, seed):
    lifecycle = AssignmentLifecycle(store)
    keep = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields(title="Keep"))
    doomed = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields(title="Doomed"))

    intake = SubmissionIntake(store)
    intake.submit(doomed.id, SubmissionCreate(student_id=seed.student, answers={"q1": "4"}))
    intake.submit(doomed.id, SubmissionCreate(student_id=seed.other_student, answers={"q1": "3"}))
    survivor = intake.submit(keep.id, SubmissionCreate(student_id=seed.student, answers={"q1": "4"}))

    removed = lifecycle.delete(doomed.id)

    assert removed == 2
    assert [a.id for a in store.list_assignments()] == [keep.id]
    assert [s.id for s in store.list_submissions()] == [survivor.id]


def test_failed_cascade_rolls_back_assignment_removal(store, seed, monkeypatch):
    lifecycle = AssignmentLifecycle(store)
    a = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields())
    SubmissionIntake(store).submit(a.id, SubmissionCreate(student_id=seed.student, answers={}))

    def broken_replace(submissions):
        raise RuntimeError("write failed")

    monkeypatch.setattr(store, "replace_submissions", broken_replace)

    with pytest.raises(RuntimeError):
        lifecycle.delete(a.id)

    assert [x.id for x in store.list_assignments()] == [a.id]
    assert len(store.list_submissions()) == 1


def test_delete_unknown_assignment_is_not_found(store):
    with pytest.raises(NotFound):
        AssignmentLifecycle(store).delete("missing")


def test_add_blank_question_preallocates_four_options():
    questions = add_blank_question([])

    assert len(questions) == 1
    assert questions[0].options == ["", "", "", ""]
    assert questions[0].correct_answer == ""
    assert questions[0].id


def test_remove_question_shifts_later_indices():
    questions = [Question(id=f"q{i}", text=str(i)) for i in range(3)]

    remaining = remove_question(questions, 1)

    assert [q.id for q in remaining] == ["q0", "q2"]
    assert len(questions) == 3


def test_edit_question_returns_new_list():
    questions = add_blank_question([])

    edited = edit_question(questions, 0, "options", ["a", "b", "c", "d"])
    edited = edit_question(edited, 0, "correct_answer", "b")

    assert edited[0].options == ["a", "b", "c", "d"]
    assert edited[0].correct_answer == "b"
    assert questions[0].options == ["", "", "", ""]


def test_question_helpers_reject_bad_index_or_field():
    questions = add_blank_question([])

    with pytest.raises(IndexError):
        remove_question(questions, 5)
    with pytest.raises(IndexError):
        edit_question(questions, -1, "text", "x")
    with pytest.raises(ValueError):
        edit_question(questions, 0, "id", "x")


def test_repeated_question_ids_get_fresh_ids(store, seed):
    a = AssignmentLifecycle(store).create(
        seed.fall_courses["CS101"],
        seed.fall,
        mcq_fields(
            questions=[
                {"id": "q1", "text": "first", "correct_answer": "a"},
                {"id": "q1", "text": "second", "correct_answer": "b"},
            ]
        ),
    )

    ids = [q.id for q in a.questions]
    assert ids[0] == "q1"
    assert len(set(ids)) == 2
    assert [q.text for q in a.questions] == ["first", "second"]


def test_update_ignores_null_for_required_fields(store, seed):
    lifecycle = AssignmentLifecycle(store)
    a = lifecycle.create(seed.fall_courses["CS101"], seed.fall, mcq_fields())

    updated = lifecycle.update(
        a.id,
        AssignmentUpdate(type=None, show_results=None, questions=None, max_score=None),
    )

    assert updated.type == "mcq"
    assert updated.show_results is True
    assert updated.questions == a.questions
    assert updated.max_score == 20
