from typing import Optional

from pydantic import BaseModel, Field


class GradeUpdate(BaseModel):
    grade: str


class BulkGradeRequest(BaseModel):
    submission_ids: list[str] = Field(default_factory=list)
    grade: str = ""


class FullMarksRequest(BaseModel):
    submission_ids: list[str] = Field(default_factory=list)


class ScorePreview(BaseModel):
    grade: Optional[str] = None


class GradingResult(BaseModel):
    """Ids whose grade was written. Empty means nothing resolved."""

    updated: list[str] = Field(default_factory=list)
    count: int = 0

    @classmethod
    def of(cls, ids: list[str]) -> "GradingResult":
        return cls(updated=list(ids), count=len(ids))
