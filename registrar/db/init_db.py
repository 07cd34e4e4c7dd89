from registrar.db.base_class import Base
from registrar.db.session import engine

# import models so SQLAlchemy registers them
from registrar.models import (  # noqa: F401
    assignment,
    course,
    enrollment,
    semester,
    settings,
    submission,
    user,
)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
