from sqlalchemy import Column, DateTime, ForeignKey, String, func

from registrar.core.ids import new_id
from registrar.db.base_class import Base


class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id = Column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # NULL on records that predate semester support
    semester_id = Column(String(36), nullable=True, index=True)
    enrolled_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    outcome = Column(String(10), nullable=True)  # "passed" | "failed"
