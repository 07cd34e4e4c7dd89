import logging

from fastapi import FastAPI

from registrar.core.error_handlers import register_error_handlers
from registrar.core.logging_middleware import LoggingMiddleware
from registrar.db.init_db import init_db
from registrar.routers.assignments import router as assignments_router
from registrar.routers.courses import router as courses_router
from registrar.routers.enrollments import router as enrollments_router
from registrar.routers.semesters import router as semesters_router
from registrar.routers.settings import router as settings_router
from registrar.routers.submissions import router as submissions_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Registrar")

# Middleware
app.add_middleware(LoggingMiddleware)

register_error_handlers(app)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(semesters_router, prefix="/semesters", tags=["semesters"])
app.include_router(settings_router, prefix="/settings", tags=["settings"])
app.include_router(courses_router, prefix="/courses", tags=["courses"])
app.include_router(enrollments_router, prefix="/enrollments", tags=["enrollments"])

# assignment and submission routes span /courses, /assignments and /submissions
app.include_router(assignments_router, tags=["assignments"])
app.include_router(submissions_router, tags=["grading"])
