from fastapi import APIRouter, Depends, status

from registrar.core.deps import get_semester_context, get_store
from registrar.core.permissions import ActorRole, require_staff
from registrar.schemas.assignment import AssignmentCreate, AssignmentRead, AssignmentUpdate
from registrar.services.assignments import AssignmentLifecycle
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.get("/courses/{course_id}/assignments", response_model=list[AssignmentRead])
def list_assignments(
    course_id: str,
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
):
    return AssignmentLifecycle(store).list_for_course(course_id, semester_id)


@router.post(
    "/courses/{course_id}/assignments",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_assignment(
    course_id: str,
    payload: AssignmentCreate,
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return AssignmentLifecycle(store).create(course_id, semester_id, payload)


@router.patch("/assignments/{assignment_id}", response_model=AssignmentRead)
def update_assignment(
    assignment_id: str,
    payload: AssignmentUpdate,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    return AssignmentLifecycle(store).update(assignment_id, payload)


@router.delete("/assignments/{assignment_id}")
def delete_assignment(
    assignment_id: str,
    store: SqlEntityStore = Depends(get_store),
    _staff: ActorRole = Depends(require_staff),
):
    removed = AssignmentLifecycle(store).delete(assignment_id)
    return {"deleted": assignment_id, "submissions_removed": removed}
