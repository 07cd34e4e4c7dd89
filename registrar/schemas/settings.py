from typing import Literal, Optional

from pydantic import BaseModel


class SettingsRead(BaseModel):
    active_semester_id: Optional[str] = None
    default_semester_id: Optional[str] = None
    registration_status: Literal["open", "closed"] = "open"

    class Config:
        from_attributes = True
        frozen = True


class SettingsUpdate(BaseModel):
    active_semester_id: Optional[str] = None
    default_semester_id: Optional[str] = None
    registration_status: Optional[Literal["open", "closed"]] = None
