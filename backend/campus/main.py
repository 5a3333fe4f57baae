"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the campus registry.
Controllers are intentionally thin: they validate request shapes,
delegate to services, and return JSON responses.

Endpoints implemented:
- POST /faculty
- GET /faculty
- GET /faculty/{id}
- PUT /faculty/{id}
- DELETE /faculty/{id}
- GET /faculty/{id}/students
- POST /student
- GET /student
- GET /student/{id}
- PUT /student/{id}
- DELETE /student/{id}
- GET /student/{id}/faculty
- GET /health
"""

from fastapi import FastAPI, Depends, Path, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from typing import List, Optional
import json
import logging
import time
import uuid
from . import models
from .config import settings
from .database import create_db_and_tables
from .dependencies import get_faculty_service, get_student_service
from .exceptions import ConflictError, NotFoundError, ValidationError
from .schemas import FacultyIn, FacultyOut, StudentIn, StudentOut, faculty_out, student_out, students_out
from .schemas import MAX_AGE, MAX_ID, MIN_AGE
from .services import FacultyService, StudentService

app = FastAPI(title="Campus Registry API")
logger = logging.getLogger("campus.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
            ensure_ascii=True,
        ),
    )
    return response


def _error_response(request: Request, status_code: int, detail) -> JSONResponse:
    logger.warning("request_rejected %s %s -> %s: %s", request.method, request.url.path, status_code, detail)
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(request, 404, str(exc))


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error_response(request, 400, str(exc))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return _error_response(request, 409, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies and query strings as 400 rather than 422."""
    return _error_response(request, 400, jsonable_encoder(exc.errors()))


@app.post('/faculty', response_model=FacultyOut)
def create_faculty(payload: FacultyIn, svc: FacultyService = Depends(get_faculty_service)):
    """Create a faculty and return it with its new id."""
    faculty = svc.create(models.Faculty(name=payload.name, color=payload.color))
    return faculty_out(faculty)


@app.get('/faculty', response_model=List[FacultyOut])
def list_faculties(
    color: Optional[str] = None,
    search: Optional[str] = None,
    svc: FacultyService = Depends(get_faculty_service),
):
    """List faculties.

    `color` filters by color; `search` matches part of the name or
    color. Both comparisons ignore case.
    """
    return [faculty_out(f) for f in svc.list(color=color, search=search)]


@app.get('/faculty/{faculty_id}', response_model=FacultyOut)
def get_faculty(faculty_id: int = Path(ge=1, le=MAX_ID), svc: FacultyService = Depends(get_faculty_service)):
    return faculty_out(svc.get(faculty_id))


@app.put('/faculty/{faculty_id}', response_model=FacultyOut)
def update_faculty(payload: FacultyIn, faculty_id: int = Path(ge=1, le=MAX_ID), svc: FacultyService = Depends(get_faculty_service)):
    """Replace name and color of an existing faculty."""
    faculty = svc.update(faculty_id, models.Faculty(name=payload.name, color=payload.color))
    return faculty_out(faculty)


@app.delete('/faculty/{faculty_id}', response_model=FacultyOut)
def delete_faculty(faculty_id: int = Path(ge=1, le=MAX_ID), svc: FacultyService = Depends(get_faculty_service)):
    """Delete a faculty without students and return what was removed."""
    out = faculty_out(svc.get(faculty_id))
    svc.delete(faculty_id)
    return out


@app.get('/faculty/{faculty_id}/students', response_model=List[StudentOut])
def list_faculty_students(faculty_id: int = Path(ge=1, le=MAX_ID), svc: FacultyService = Depends(get_faculty_service)):
    return students_out(svc.students(faculty_id))


@app.post('/student', response_model=StudentOut)
def create_student(payload: StudentIn, svc: StudentService = Depends(get_student_service)):
    """Create a student, optionally linked to an existing faculty."""
    return student_out(svc.create(payload.to_model()))


@app.get('/student', response_model=List[StudentOut])
def list_students(
    min_age: Optional[int] = Query(default=None, alias="min", ge=MIN_AGE, le=MAX_AGE),
    max_age: Optional[int] = Query(default=None, alias="max", ge=MIN_AGE, le=MAX_AGE),
    svc: StudentService = Depends(get_student_service),
):
    """List students, or only those aged `min`..`max` inclusive.

    Both bounds must be given together; without them every student is
    returned.
    """
    if min_age is None and max_age is None:
        return students_out(svc.list_all())
    if min_age is None or max_age is None:
        raise ValidationError("min and max must be given together")
    return students_out(svc.find_by_age_range(min_age, max_age))


@app.get('/student/{student_id}', response_model=StudentOut)
def get_student(student_id: int = Path(ge=1, le=MAX_ID), svc: StudentService = Depends(get_student_service)):
    return student_out(svc.get(student_id))


@app.put('/student/{student_id}', response_model=StudentOut)
def update_student(payload: StudentIn, student_id: int = Path(ge=1, le=MAX_ID), svc: StudentService = Depends(get_student_service)):
    """Replace all fields of a student, including its faculty link.

    The id in the URL identifies the record; an id in the body is ignored.
    """
    return student_out(svc.update(student_id, payload.to_model()))


@app.delete('/student/{student_id}', response_model=StudentOut)
def delete_student(student_id: int = Path(ge=1, le=MAX_ID), svc: StudentService = Depends(get_student_service)):
    out = student_out(svc.get(student_id))
    svc.delete(student_id)
    return out


@app.get('/student/{student_id}/faculty', response_model=Optional[FacultyOut])
def get_student_faculty(student_id: int = Path(ge=1, le=MAX_ID), svc: StudentService = Depends(get_student_service)):
    """Return the faculty of a student, or `null` when it has none."""
    faculty = svc.get_faculty(student_id)
    return faculty_out(faculty) if faculty is not None else None


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
