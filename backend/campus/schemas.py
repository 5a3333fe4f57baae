"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from . import models

MAX_ID = 2**63 - 1
MIN_AGE = 0
MAX_AGE = 150


class FacultyIn(BaseModel):
    """Payload for creating or replacing a faculty.

    An `id` in the body is accepted for symmetry with responses but never
    used; ids come from the database or the URL.
    """
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100)
    color: str = Field(min_length=1, max_length=100)


class FacultyOut(BaseModel):
    id: int
    name: str
    color: str


class FacultyRef(BaseModel):
    """Faculty reference inside a student payload; only `id` is read."""
    id: int = Field(ge=1, le=MAX_ID)
    name: Optional[str] = None
    color: Optional[str] = None


class StudentIn(BaseModel):
    """Payload for creating or replacing a student.

    The faculty link may be given as `faculty_id` or as a nested
    `faculty` object; the nested object wins when both are present.
    """
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100)
    age: int = Field(ge=MIN_AGE, le=MAX_AGE)
    faculty_id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    faculty: Optional[FacultyRef] = None

    def resolved_faculty_id(self) -> Optional[int]:
        if self.faculty is not None:
            return self.faculty.id
        return self.faculty_id

    def to_model(self) -> models.Student:
        return models.Student(name=self.name, age=self.age, faculty_id=self.resolved_faculty_id())


class StudentOut(BaseModel):
    """Student as returned by the API, with its faculty embedded."""
    id: int
    name: str
    age: int
    faculty_id: Optional[int] = None
    faculty: Optional[FacultyOut] = None


def faculty_out(faculty: models.Faculty) -> FacultyOut:
    return FacultyOut(id=faculty.id, name=faculty.name, color=faculty.color)


def student_out(student: models.Student) -> StudentOut:
    """Build the response shape for `student` while its session is open."""
    faculty = student.faculty
    return StudentOut(
        id=student.id,
        name=student.name,
        age=student.age,
        faculty_id=student.faculty_id,
        faculty=faculty_out(faculty) if faculty is not None else None,
    )


def students_out(students: List[models.Student]) -> List[StudentOut]:
    return [student_out(s) for s in students]
