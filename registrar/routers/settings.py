from fastapi import APIRouter, Depends

from registrar.core.deps import get_store
from registrar.core.permissions import ActorRole, require_admin
from registrar.schemas.settings import SettingsRead, SettingsUpdate
from registrar.services.semesters import SemesterManager
from registrar.store.sql_store import SqlEntityStore

router = APIRouter()


@router.get("", response_model=SettingsRead)
def read_settings(store: SqlEntityStore = Depends(get_store)):
    return store.get_settings()


@router.put("", response_model=SettingsRead)
def update_settings(
    payload: SettingsUpdate,
    store: SqlEntityStore = Depends(get_store),
    _admin: ActorRole = Depends(require_admin),
):
    return SemesterManager(store).update_settings(payload)
