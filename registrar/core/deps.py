from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from registrar.core.config import DEFAULT_SEMESTER_ID
from registrar.db.session import SessionLocal
from registrar.store.sql_store import SqlEntityStore


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> SqlEntityStore:
    return SqlEntityStore(db)


def get_semester_context(
    semester_id: Optional[str] = Query(default=None),
    store: SqlEntityStore = Depends(get_store),
) -> str:
    """Semester the request works in: explicit, else active, else default."""
    if semester_id:
        return semester_id
    settings = store.get_settings()
    return settings.active_semester_id or settings.default_semester_id or DEFAULT_SEMESTER_ID
