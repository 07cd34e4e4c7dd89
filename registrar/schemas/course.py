from pydantic import BaseModel, Field


class CourseCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    semester_id: str | None = None
    title: str = Field(min_length=1, max_length=255)
    title_ar: str | None = None
    credits: int = 3
    description: str | None = None
    description_ar: str | None = None
    doctor: str | None = None
    doctor_ar: str | None = None
    day: str | None = None
    time: str | None = None
    is_registration_enabled: bool = True
    lecture_link: str | None = None
    whatsapp_link: str | None = None
    telegram_link: str | None = None


class CourseRead(CourseCreate):
    id: str

    class Config:
        from_attributes = True
        frozen = True
