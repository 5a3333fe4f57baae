"""FastAPI dependency providers.

Each provider builds one collaborator for the current request: the
session comes from `get_session`, repositories wrap the session and
services receive their repositories through the constructor. Tests swap
any of them via `app.dependency_overrides`.
"""

from fastapi import Depends
from sqlmodel import Session

from .database import get_session
from .repositories import FacultyRepository, StudentRepository
from .services import FacultyService, StudentService


def get_faculty_repository(db: Session = Depends(get_session)) -> FacultyRepository:
    return FacultyRepository(db)


def get_student_repository(db: Session = Depends(get_session)) -> StudentRepository:
    return StudentRepository(db)


def get_faculty_service(
    faculty_repo: FacultyRepository = Depends(get_faculty_repository),
    student_repo: StudentRepository = Depends(get_student_repository),
) -> FacultyService:
    return FacultyService(faculty_repo, student_repo)


def get_student_service(
    student_repo: StudentRepository = Depends(get_student_repository),
    faculty_repo: FacultyRepository = Depends(get_faculty_repository),
) -> StudentService:
    return StudentService(student_repo, faculty_repo)
