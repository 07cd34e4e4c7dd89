from fastapi import APIRouter, Depends, status

from registrar.core.deps import get_semester_context, get_store
from registrar.core.ids import new_id
from registrar.core.permissions import ActorRole, require_admin
from registrar.schemas.course import CourseCreate, CourseRead
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.get("", response_model=list[CourseRead])
def list_courses(
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
):
    return [c for c in store.list_courses() if c.semester_id == semester_id]


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    semester_id: str = Depends(get_semester_context),
    store: SqlEntityStore = Depends(get_store),
    _admin: ActorRole = Depends(require_admin),
):
    course = CourseRead(
        id=new_id(),
        **payload.model_dump(exclude={"semester_id"}),
        semester_id=payload.semester_id or semester_id,
    )
    with store.transaction():
        store.append_courses([course])
    return course
