import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV default is a local sqlite file; deployments set DATABASE_URL.
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/registrar.db")

# Enrollment rules
MAX_ENROLLMENTS_PER_SEMESTER = int(os.getenv("MAX_ENROLLMENTS_PER_SEMESTER", "6"))
DEFAULT_SEMESTER_ID = os.getenv("DEFAULT_SEMESTER_ID", "sem-default")  # legacy records without a semester
RETAKE_POLICY = os.getenv("RETAKE_POLICY", "block_any")  # block_any | block_passed | allow

# Assessment
DEFAULT_MAX_SCORE = int(os.getenv("DEFAULT_MAX_SCORE", "20"))
MCQ_OPTION_SLOTS = 4
