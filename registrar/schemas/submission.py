from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


class SubmissionCreate(BaseModel):
    student_id: str
    # question id -> answer, or a legacy list ordered like the questions
    answers: Optional[Union[dict[str, str], list[str]]] = None
    file_name: Optional[str] = None
    file_data: Optional[str] = None


class SubmissionRead(BaseModel):
    id: str
    assignment_id: str
    student_id: str
    course_id: str
    submitted_at: datetime
    answers: dict[str, str] = Field(default_factory=dict)
    file_name: Optional[str] = None
    file_data: Optional[str] = None
    grade: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True
