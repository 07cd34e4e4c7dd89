from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class AssignmentType(str, Enum):
    FILE = "file"
    MCQ = "mcq"
    ESSAY = "essay"


class Question(BaseModel):
    id: Optional[str] = None
    text: str = ""
    options: list[str] = Field(default_factory=list)
    correct_answer: Optional[str] = None

    class Config:
        from_attributes = True


class AssignmentCreate(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    type: AssignmentType = AssignmentType.FILE
    # raw form value; the engine decides whether it resolves to a timestamp
    deadline: Optional[Union[datetime, str]] = None
    questions: list[Question] = Field(default_factory=list)
    show_results: bool = True
    max_score: Optional[int] = Field(default=None, gt=0)

    class Config:
        use_enum_values = True


class AssignmentUpdate(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    type: Optional[AssignmentType] = None
    deadline: Optional[Union[datetime, str]] = None
    questions: Optional[list[Question]] = None
    show_results: Optional[bool] = None
    max_score: Optional[int] = Field(default=None, gt=0)

    class Config:
        use_enum_values = True


class AssignmentRead(BaseModel):
    id: str
    course_id: str
    semester_id: str
    title: str
    subtitle: Optional[str] = None
    type: AssignmentType
    deadline: datetime
    questions: list[Question] = Field(default_factory=list)
    show_results: bool = True
    max_score: int
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True
        use_enum_values = True
