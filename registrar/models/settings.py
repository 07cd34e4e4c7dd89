from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from registrar.db.base_class import Base


class SiteSettings(Base):
    """Single-row table; the row with id 1 is the only one ever read."""

    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    active_semester_id: Mapped[str | None] = mapped_column(String(36))
    default_semester_id: Mapped[str | None] = mapped_column(String(36))
    registration_status: Mapped[str] = mapped_column(
        String(10), nullable=False, default="open"
    )
