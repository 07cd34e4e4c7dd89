import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from registrar.core.deps import get_db
from registrar.db.base_class import Base
from registrar.main import app
from registrar.models.assignment import Assignment
from registrar.models.course import Course
from registrar.models.enrollment import Enrollment
from registrar.models.semester import Semester
from registrar.models.settings import SiteSettings
from registrar.models.submission import Submission
from registrar.models.user import User
from registrar.store.sql_store import SqlEntityStore

TEST_DB_FILE = "test_registrar.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FALL = "sem-fall24"
SPRING = "sem-spring25"
SUMMER = "sem-summer25"

FALL_CODES = ["CS101", "CS102", "CS103", "CS104", "CS105", "CS106", "CS107", "CS108"]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed():
    """Seed a clean dataset for each test and hand back its ids."""
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        for model in (Submission, Assignment, Enrollment, Course, SiteSettings, Semester, User):
            db.query(model).delete()
        db.commit()

        base = datetime(2024, 9, 1, tzinfo=timezone.utc)
        db.add_all(
            [
                Semester(id=FALL, name="FALL 2024", created_at=base),
                Semester(id=SPRING, name="SPRING 2025", created_at=base + timedelta(days=150)),
                Semester(id=SUMMER, name="SUMMER 2025", created_at=base + timedelta(days=270)),
                SiteSettings(id=1, active_semester_id=FALL, default_semester_id=FALL, registration_status="open"),
                User(id="u-admin", email="admin@example.com", full_name="Admin", role="admin"),
                User(id="u-s1", email="student1@example.com", full_name="Student One", role="student"),
                User(id="u-s2", email="student2@example.com", full_name="Student Two", role="student"),
            ]
        )

        fall_courses = {}
        for code in FALL_CODES:
            course_id = f"c-fall-{code.lower()}"
            fall_courses[code] = course_id
            db.add(Course(id=course_id, code=code, semester_id=FALL, title=f"Course {code}", doctor="Dr. Smith"))

        db.add_all(
            [
                Course(
                    id="c-fall-ph100",
                    code="PH100",
                    semester_id=FALL,
                    title="Physics",
                    is_registration_enabled=False,
                ),
                Course(id="c-spring-cs101", code="CS101", semester_id=SPRING, title="Course CS101"),
                Course(id="c-spring-ma201", code="MA201", semester_id=SPRING, title="Calculus II"),
            ]
        )
        db.commit()

        yield SimpleNamespace(
            fall=FALL,
            spring=SPRING,
            summer=SUMMER,
            admin="u-admin",
            student="u-s1",
            other_student="u-s2",
            fall_courses=fall_courses,
            closed_course="c-fall-ph100",
            spring_cs101="c-spring-cs101",
            spring_ma201="c-spring-ma201",
        )
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return SqlEntityStore(db)


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
