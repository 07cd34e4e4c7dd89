import pytest

from registrar.core.errors import RejectionReason, ValidationRejection
from registrar.schemas.assignment import AssignmentCreate, Question
from registrar.schemas.submission import SubmissionCreate
from registrar.services.assignments import AssignmentLifecycle
from registrar.services.grading import GradingEngine, answers_by_question, calculate_score
from registrar.services.submissions import SubmissionIntake

QUESTIONS = [
    {"id": "q1", "text": "2+2", "options": ["3", "4"], "correct_answer": "4"},
    {"id": "q2", "text": "Capital of France", "options": ["Paris", "Lyon"], "correct_answer": "Paris"},
    {"id": "q3", "text": "Largest planet", "options": ["Mars", "Jupiter"], "correct_answer": "Jupiter"},
]


def make_assignment(store, seed, type_="mcq", **fields):
    data = {"title": "Quiz", "type": type_, "deadline": "2024-10-01T12:00:00", "questions": QUESTIONS}
    data.update(fields)
    return AssignmentLifecycle(store).create(seed.fall_courses["CS101"], seed.fall, AssignmentCreate(**data))


def submit(store, assignment_id, student_id, answers=None, **fields):
    return SubmissionIntake(store).submit(
        assignment_id, SubmissionCreate(student_id=student_id, answers=answers, **fields)
    )


def grades(store):
    return {s.id: s.grade for s in store.list_submissions()}


def test_calculate_score_counts_exact_matches():
    questions = [Question(**q) for q in QUESTIONS]
    assert calculate_score(questions, {"q1": "4", "q2": "Paris", "q3": "Mars"}) == "2/3"


def test_calculate_score_is_case_sensitive():
    questions = [Question(**q) for q in QUESTIONS]
    assert calculate_score(questions, {"q1": "4", "q2": "paris", "q3": "Jupiter"}) == "2/3"


def test_question_without_correct_answer_never_scores():
    questions = [Question(id="q1", correct_answer=""), Question(id="q2", correct_answer="b")]

    # an empty answer does not match an empty key
    assert calculate_score(questions, {"q1": "", "q2": "b"}) == "1/2"
    assert calculate_score([Question(id="q1")], {"q1": ""}) == "0/1"


def test_calculate_score_handles_missing_answers():
    questions = [Question(**q) for q in QUESTIONS]

    assert calculate_score(questions, None) == "0/3"
    assert calculate_score(questions, {"q2": "Paris"}) == "1/3"
    assert calculate_score([], {}) == "0/0"


def test_legacy_positional_answers_are_read_by_order():
    questions = [Question(**q) for q in QUESTIONS]

    assert calculate_score(questions, ["4", "Lyon"]) == "1/3"
    assert answers_by_question(questions, ["4", "Lyon"]) == {"q1": "4", "q2": "Lyon"}


def test_mcq_submission_is_graded_on_intake(store, seed):
    a = make_assignment(store, seed)

    s = submit(store, a.id, seed.student, {"q1": "4", "q2": "Paris", "q3": "Mars"})

    assert s.grade == "2/3"


def test_positional_submission_is_stored_by_question_id(store, seed):
    a = make_assignment(store, seed)

    s = submit(store, a.id, seed.student, ["4", "Paris", "Jupiter"])

    assert s.answers == {"q1": "4", "q2": "Paris", "q3": "Jupiter"}
    assert s.grade == "3/3"


def test_file_submission_keeps_only_the_file(store, seed):
    a = make_assignment(store, seed, type_="file", questions=[])

    s = submit(store, a.id, seed.student, {"q1": "ignored"}, file_name="essay.pdf", file_data="ZGF0YQ==")

    assert s.answers == {}
    assert s.file_name == "essay.pdf"
    assert s.grade is None


def test_second_submission_is_rejected(store, seed):
    a = make_assignment(store, seed)
    submit(store, a.id, seed.student, {"q1": "4"})

    with pytest.raises(ValidationRejection) as exc:
        submit(store, a.id, seed.student, {"q1": "3"})

    assert exc.value.reason is RejectionReason.DUPLICATE_SUBMISSION
    assert len(store.list_submissions()) == 1


def test_auto_grade_overwrites_manual_grades(store, seed):
    a = make_assignment(store, seed)
    s1 = submit(store, a.id, seed.student, {"q1": "4", "q2": "Paris", "q3": "Mars"})
    s2 = submit(store, a.id, seed.other_student, {"q1": "3"})
    engine = GradingEngine(store)
    engine.set_grade(s1.id, "A+")

    result = engine.auto_grade_mcq(a.id)

    assert sorted(result.updated) == sorted([s1.id, s2.id])
    assert grades(store) == {s1.id: "2/3", s2.id: "0/3"}


def test_auto_grade_only_touches_its_assignment(store, seed):
    a = make_assignment(store, seed)
    other = make_assignment(store, seed, title="Other")
    mine = submit(store, a.id, seed.student, {"q1": "4"})
    theirs = submit(store, other.id, seed.student, {"q1": "4"})
    GradingEngine(store).set_grade(theirs.id, "manual")

    result = GradingEngine(store).auto_grade_mcq(a.id)

    assert result.updated == [mine.id]
    assert grades(store)[theirs.id] == "manual"


def test_auto_grade_unknown_assignment_is_noop(store):
    result = GradingEngine(store).auto_grade_mcq("missing")
    assert result.count == 0


def test_auto_grade_rejects_non_mcq_assignment(store, seed):
    a = make_assignment(store, seed, type_="essay")

    with pytest.raises(ValidationRejection) as exc:
        GradingEngine(store).auto_grade_mcq(a.id)
    assert exc.value.reason is RejectionReason.NOT_AUTO_GRADABLE


def test_set_grade_unknown_submission_is_noop(store, seed):
    a = make_assignment(store, seed)
    s = submit(store, a.id, seed.student, {"q1": "4"})

    result = GradingEngine(store).set_grade("missing", "10/20")

    assert result.count == 0
    assert grades(store) == {s.id: "1/3"}


def test_bulk_grade_is_order_independent_and_leaves_others(store, seed):
    a = make_assignment(store, seed, type_="essay", questions=[])
    b = make_assignment(store, seed, type_="essay", questions=[], title="Essay 2")
    s1 = submit(store, a.id, seed.student)
    s2 = submit(store, a.id, seed.other_student)
    s3 = submit(store, b.id, seed.student)
    engine = GradingEngine(store)

    engine.bulk_apply_grade([s2.id, s1.id, s1.id], "15/20")
    first = grades(store)
    engine.bulk_apply_grade([s1.id, s2.id], "15/20")

    assert grades(store) == first
    assert first == {s1.id: "15/20", s2.id: "15/20", s3.id: None}


@pytest.mark.parametrize("ids, grade", [([], "15/20"), (["x"], "")])
def test_bulk_grade_noop_inputs(store, seed, ids, grade):
    a = make_assignment(store, seed, type_="essay", questions=[])
    s = submit(store, a.id, seed.student)
    ids = [s.id if i == "x" else i for i in ids]

    result = GradingEngine(store).bulk_apply_grade(ids, grade)

    assert result.count == 0
    assert grades(store) == {s.id: None}


def test_full_marks_uses_assignment_max_score(store, seed):
    default = make_assignment(store, seed, type_="essay", questions=[])
    small = make_assignment(store, seed, type_="essay", questions=[], title="Lab", max_score=10)
    s1 = submit(store, default.id, seed.student)
    s2 = submit(store, small.id, seed.student)
    s3 = submit(store, small.id, seed.other_student)

    result = GradingEngine(store).full_marks([s1.id, s2.id, "missing"])

    assert sorted(result.updated) == sorted([s1.id, s2.id])
    assert grades(store) == {s1.id: "20/20", s2.id: "10/10", s3.id: None}


def test_full_marks_empty_selection_is_noop(store):
    assert GradingEngine(store).full_marks([]).count == 0


def test_preview_scores_without_saving(store, seed):
    a = make_assignment(store, seed)
    s = submit(store, a.id, seed.student, {"q1": "4", "q2": "Paris"})
    engine = GradingEngine(store)
    engine.set_grade(s.id, "pending")

    assert engine.preview(s.id) == "2/3"
    assert grades(store) == {s.id: "pending"}
    assert engine.preview("missing") is None


def test_bulk_grade_applies_blank_grade_as_given(store, seed):
    a = make_assignment(store, seed, type_="essay", questions=[])
    s = submit(store, a.id, seed.student)

    result = GradingEngine(store).bulk_apply_grade([s.id], "   ")

    assert result.updated == [s.id]
    assert grades(store) == {s.id: "   "}


def test_repeated_question_ids_keep_answers_apart(store, seed):
    a = make_assignment(
        store,
        seed,
        questions=[
            {"id": "q1", "text": "first", "options": ["a", "b"], "correct_answer": "a"},
            {"id": "q1", "text": "second", "options": ["a", "b"], "correct_answer": "b"},
        ],
    )

    s = submit(store, a.id, seed.student, ["a", "b"])

    assert len(s.answers) == 2
    assert s.grade == "2/2"
