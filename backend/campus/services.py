"""Business logic services used by HTTP controllers.

Services are intentionally thin: they check references between records,
turn missing rows into `NotFoundError` and persist through the
repositories they are given. Repositories are passed in by the caller
(see `campus.dependencies`), which keeps services easy to exercise with
mocks.
"""

import logging
from typing import List, Optional

from . import models
from .exceptions import ConflictError, NotFoundError, ValidationError
from .repositories import FacultyStore, StudentStore

logger = logging.getLogger("campus.services")


class FacultyService:
    """Create, edit, list and delete faculties."""
    def __init__(self, faculty_repo: FacultyStore, student_repo: StudentStore):
        self.faculty_repo = faculty_repo
        self.student_repo = student_repo

    def create(self, faculty: models.Faculty) -> models.Faculty:
        """Persist a new faculty; any id already on `faculty` is discarded."""
        faculty.id = None
        created = self.faculty_repo.save(faculty)
        logger.info("faculty_created id=%s name=%r", created.id, created.name)
        return created

    def get(self, faculty_id: int) -> models.Faculty:
        faculty = self.faculty_repo.get(faculty_id)
        if faculty is None:
            raise NotFoundError("faculty", faculty_id)
        return faculty

    def update(self, faculty_id: int, faculty: models.Faculty) -> models.Faculty:
        """Replace name and color of the faculty stored at `faculty_id`."""
        existing = self.get(faculty_id)
        existing.name = faculty.name
        existing.color = faculty.color
        saved = self.faculty_repo.save(existing)
        logger.info("faculty_updated id=%s", saved.id)
        return saved

    def delete(self, faculty_id: int) -> None:
        """Delete a faculty that no student refers to.

        Raises `ConflictError` while students are still linked; they have
        to be moved or deleted first.
        """
        faculty = self.get(faculty_id)
        linked = self.student_repo.count_by_faculty(faculty_id)
        if linked:
            raise ConflictError(f"faculty {faculty_id} still has {linked} student(s)")
        self.faculty_repo.delete(faculty)
        logger.info("faculty_deleted id=%s", faculty_id)

    def list(self, color: Optional[str] = None, search: Optional[str] = None) -> List[models.Faculty]:
        """List faculties, optionally filtered by color or by name-or-color."""
        if color is not None and search is not None:
            raise ValidationError("use either color or search, not both")
        if color is not None:
            return self.faculty_repo.list_by_color(color)
        if search is not None:
            return self.faculty_repo.search(search)
        return self.faculty_repo.list_all()

    def students(self, faculty_id: int) -> List[models.Student]:
        self.get(faculty_id)
        return self.student_repo.list_by_faculty(faculty_id)


class StudentService:
    """Create, edit and query students."""
    def __init__(self, student_repo: StudentStore, faculty_repo: FacultyStore):
        self.student_repo = student_repo
        self.faculty_repo = faculty_repo

    def _check_faculty(self, faculty_id: Optional[int]) -> None:
        if faculty_id is not None and self.faculty_repo.get(faculty_id) is None:
            raise NotFoundError("faculty", faculty_id)

    def create(self, student: models.Student) -> models.Student:
        """Persist a new student after checking its faculty link."""
        self._check_faculty(student.faculty_id)
        student.id = None
        created = self.student_repo.save(student)
        logger.info("student_created id=%s faculty_id=%s", created.id, created.faculty_id)
        return created

    def get(self, student_id: int) -> models.Student:
        student = self.student_repo.find_by_id(student_id)
        if student is None:
            raise NotFoundError("student", student_id)
        return student

    def update(self, student_id: int, student: models.Student) -> models.Student:
        """Replace every mutable field of the student at `student_id`.

        That includes the faculty link: a `None` faculty detaches the
        student. The stored id is kept whatever `student.id` holds.
        """
        existing = self.get(student_id)
        self._check_faculty(student.faculty_id)
        existing.name = student.name
        existing.age = student.age
        existing.faculty_id = student.faculty_id
        saved = self.student_repo.save(existing)
        logger.info("student_updated id=%s faculty_id=%s", saved.id, saved.faculty_id)
        return saved

    def delete(self, student_id: int) -> None:
        student = self.get(student_id)
        self.student_repo.delete(student)
        logger.info("student_deleted id=%s", student_id)

    def find_by_age_range(self, min_age: int, max_age: int) -> List[models.Student]:
        """Return students aged between `min_age` and `max_age` inclusive."""
        return self.student_repo.find_by_age_between(min_age, max_age)

    def list_all(self) -> List[models.Student]:
        return self.student_repo.list_all()

    def get_faculty(self, student_id: int) -> Optional[models.Faculty]:
        """Return the faculty of a student, or `None` when it has none."""
        return self.get(student_id).faculty
