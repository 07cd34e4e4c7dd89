from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from registrar.core.ids import new_id
from registrar.db.base_class import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    semester_id = Column(String(36), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    subtitle = Column(Text, nullable=True)
    type = Column(String(10), nullable=False, default="file")
    deadline = Column(DateTime(timezone=True), nullable=False)

    # ordered list of {"id", "text", "options", "correct_answer"}
    questions = Column(JSON, nullable=False, default=list)
    show_results = Column(Boolean, nullable=False, default=True)
    max_score = Column(Integer, nullable=False, default=20)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
