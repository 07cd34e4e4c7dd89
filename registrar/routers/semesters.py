from fastapi import APIRouter, Depends, status

from registrar.core.deps import get_store
from registrar.core.permissions import ActorRole, require_admin
from registrar.schemas.semester import (
    CopyCoursesRequest,
    CopyResult,
    SemesterCreate,
    SemesterRead,
    SemesterRename,
)
from registrar.schemas.settings import SettingsUpdate
from registrar.services.semester_copy import SemesterCopyEngine
from registrar.services.semesters import SemesterManager
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.get("", response_model=list[SemesterRead])
def list_semesters(store: SqlEntityStore = Depends(get_store)):
    return store.list_semesters()


@router.post("", response_model=SemesterRead, status_code=status.HTTP_201_CREATED)
def create_semester(
    payload: SemesterCreate,
    store: SqlEntityStore = Depends(get_store),
    _admin: ActorRole = Depends(require_admin),
):
    return SemesterManager(store).create(payload.name)


@router.patch("/{semester_id}", response_model=SemesterRead)
def rename_semester(
    semester_id: str,
    payload: SemesterRename,
    store: SqlEntityStore = Depends(get_store),
    _admin: ActorRole = Depends(require_admin),
):
    return SemesterManager(store).rename(semester_id, payload.name)


@router.post("/copy-courses", response_model=CopyResult)
def copy_courses(
    payload: CopyCoursesRequest,
    store: SqlEntityStore = Depends(get_store),
    _admin: ActorRole = Depends(require_admin),
):
    manager = SemesterManager(store)
    # the copy engine trusts its inputs; existence is checked here
    manager.get(payload.source_semester_id)
    manager.get(payload.target_semester_id)

    result = SemesterCopyEngine(store).copy_courses(
        payload.source_semester_id,
        payload.target_semester_id,
    )

    if payload.activate_target:
        manager.update_settings(SettingsUpdate(active_semester_id=payload.target_semester_id))
    return result
