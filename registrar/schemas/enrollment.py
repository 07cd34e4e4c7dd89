from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class EnrollmentCreate(BaseModel):
    student_id: str
    course_id: str
    semester_id: Optional[str] = None


class EnrollmentOutcomeUpdate(BaseModel):
    outcome: Optional[Literal["passed", "failed"]] = None


class EnrollmentRead(BaseModel):
    id: str
    student_id: str
    course_id: str
    semester_id: Optional[str] = None
    enrolled_at: datetime
    outcome: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True
