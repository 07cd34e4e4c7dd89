import logging
from typing import Optional

from registrar.core.errors import NotFound, RejectionReason, ValidationRejection
from registrar.core.ids import new_id, utcnow
from registrar.schemas.semester import SemesterRead
from registrar.schemas.settings import SettingsRead, SettingsUpdate
from registrar.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


class SemesterManager:
    def __init__(self, store: EntityStore):
        self.store = store

    def _ensure_unique_name(self, name: str, semesters: list[SemesterRead], ignore_id: Optional[str] = None):
        wanted = name.lower()
        for s in semesters:
            if s.id != ignore_id and s.name.lower() == wanted:
                raise ValidationRejection(
                    RejectionReason.DUPLICATE_SEMESTER_NAME,
                    "Semester already exists",
                )

    def get(self, semester_id: str) -> SemesterRead:
        for s in self.store.list_semesters():
            if s.id == semester_id:
                return s
        raise NotFound("Semester", semester_id)

    def create(self, name: str, activate: bool = True) -> SemesterRead:
        name = name.strip()
        if not name:
            raise ValidationRejection(RejectionReason.MISSING_FIELD, "Semester name is required")

        with self.store.transaction():
            self._ensure_unique_name(name, self.store.list_semesters())
            semester = SemesterRead(id=new_id(), name=name, created_at=utcnow())
            self.store.upsert_semester(semester)
            if activate:
                settings = self.store.get_settings()
                self.store.save_settings(settings.model_copy(update={"active_semester_id": semester.id}))

        logger.info("created semester %s (%s)", semester.id, semester.name)
        return semester

    def rename(self, semester_id: str, name: str) -> SemesterRead:
        name = name.strip()
        if not name:
            raise ValidationRejection(RejectionReason.MISSING_FIELD, "Semester name is required")

        with self.store.transaction():
            semesters = self.store.list_semesters()
            current = next((s for s in semesters if s.id == semester_id), None)
            if current is None:
                raise NotFound("Semester", semester_id)
            self._ensure_unique_name(name, semesters, ignore_id=semester_id)

            renamed = current.model_copy(update={"name": name})
            self.store.upsert_semester(renamed)

        return renamed

    def update_settings(self, changes: SettingsUpdate) -> SettingsRead:
        with self.store.transaction():
            known = {s.id for s in self.store.list_semesters()}
            for field in ("active_semester_id", "default_semester_id"):
                value = getattr(changes, field)
                if value is not None and value not in known:
                    raise NotFound("Semester", value)

            # an explicit null clears a semester pointer; registration status is always set
            update = changes.model_dump(exclude_unset=True)
            if update.get("registration_status", "") is None:
                del update["registration_status"]
            settings = self.store.get_settings().model_copy(update=update)
            self.store.save_settings(settings)

        return settings
