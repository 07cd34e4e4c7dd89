from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from registrar.core.deps import get_semester_context, get_store
from registrar.core.permissions import ActorRole, get_actor_role, require_staff
from registrar.schemas.enrollment import EnrollmentCreate, EnrollmentOutcomeUpdate, EnrollmentRead
from registrar.services.enrollment_rules import EnrollmentRuleEngine, effective_semester
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.post("", response_model=EnrollmentRead, status_code=status.HTTP_201_CREATED)
def enroll(
    payload: EnrollmentCreate,
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
    role: ActorRole = Depends(get_actor_role),
):
    return EnrollmentRuleEngine(store).enroll(
        payload.student_id,
        payload.course_id,
        payload.semester_id or semester_id,
        actor_role=role,
    )


@router.get("", response_model=list[EnrollmentRead])
def list_enrollments(
    student_id: Optional[str] = Query(default=None),
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
):
    return [
        e
        for e in store.list_enrollments()
        if effective_semester(e.semester_id) == semester_id
        and (student_id is None or e.student_id == student_id)
    ]


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def unenroll(
    enrollment_id: str,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    EnrollmentRuleEngine(store).unenroll(enrollment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{enrollment_id}/outcome", response_model=EnrollmentRead)
def record_outcome(
    enrollment_id: str,
    payload: EnrollmentOutcomeUpdate,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return EnrollmentRuleEngine(store).record_outcome(enrollment_id, payload.outcome)
