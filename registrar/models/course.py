from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from registrar.core.ids import new_id
from registrar.db.base_class import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    semester_id: Mapped[str | None] = mapped_column(String(36), index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    title_ar: Mapped[str | None] = mapped_column(String(255))
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    description: Mapped[str | None] = mapped_column(Text)
    description_ar: Mapped[str | None] = mapped_column(Text)
    doctor: Mapped[str | None] = mapped_column(String(255))
    doctor_ar: Mapped[str | None] = mapped_column(String(255))

    day: Mapped[str | None] = mapped_column(String(20))
    time: Mapped[str | None] = mapped_column(String(20))
    is_registration_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )

    lecture_link: Mapped[str | None] = mapped_column(String(500))
    whatsapp_link: Mapped[str | None] = mapped_column(String(500))
    telegram_link: Mapped[str | None] = mapped_column(String(500))
