from datetime import datetime

from pydantic import BaseModel, Field


class SemesterCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class SemesterRename(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class SemesterRead(BaseModel):
    id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True


class CopyCoursesRequest(BaseModel):
    source_semester_id: str
    target_semester_id: str
    # switch the active semester to the target once the copy succeeds
    activate_target: bool = True


class CopyResult(BaseModel):
    copied: int
    skipped: int
