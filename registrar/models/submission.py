from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, UniqueConstraint, func

from registrar.core.ids import new_id
from registrar.db.base_class import Base


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=new_id)

    assignment_id = Column(String(36), ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(36), nullable=False, index=True)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # question id -> answer text
    answers = Column(JSON, nullable=False, default=dict)
    file_name = Column(String(255), nullable=True)
    file_data = Column(Text, nullable=True)

    # free-form display string, e.g. "18/20"; NULL until graded
    grade = Column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),
    )
