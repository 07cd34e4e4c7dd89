from fastapi import APIRouter, Depends, status

from registrar.core.deps import get_store
from registrar.core.permissions import ActorRole, require_staff
from registrar.schemas.grading import (
    BulkGradeRequest,
    FullMarksRequest,
    GradeUpdate,
    GradingResult,
    ScorePreview,
)
from registrar.schemas.submission import SubmissionCreate, SubmissionRead
from registrar.services.grading import GradingEngine
from registrar.services.submissions import SubmissionIntake
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: str,
    payload: SubmissionCreate,
    store: SqlEntityStore = Depends(get_store),
):
    return SubmissionIntake(store).submit(assignment_id, payload)


@router.get(
    "/assignments/{assignment_id}/submissions",
    response_model=list[SubmissionRead],
)
def list_submissions_for_assignment(
    assignment_id: str,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return SubmissionIntake(store).list_for_assignment(assignment_id)


@router.post("/assignments/{assignment_id}/auto-grade", response_model=GradingResult)
def auto_grade(
    assignment_id: str,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return GradingEngine(store).auto_grade_mcq(assignment_id)


@router.patch("/submissions/{submission_id}/grade", response_model=GradingResult)
def grade_submission(
    submission_id: str,
    payload: GradeUpdate,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return GradingEngine(store).set_grade(submission_id, payload.grade)


@router.post("/submissions/bulk-grade", response_model=GradingResult)
def bulk_grade(
    payload: BulkGradeRequest,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return GradingEngine(store).bulk_apply_grade(payload.submission_ids, payload.grade)


@router.post("/submissions/full-marks", response_model=GradingResult)
def full_marks(
    payload: FullMarksRequest,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return GradingEngine(store).full_marks(payload.submission_ids)


@router.post("/submissions/{submission_id}/calculate", response_model=ScorePreview)
def calculate_grade(
    submission_id: str,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return ScorePreview(grade=GradingEngine(store).preview(submission_id))
