"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (faculties,
students). Repositories return SQLModel objects, perform
commits/refreshes where appropriate, and return `None` rather than
raising when a row is missing.

`FacultyStore` and `StudentStore` describe the surface the services rely
on, so a service can be handed any object with these methods (a mock in
tests, for instance).
"""

from typing import List, Optional, Protocol
from sqlmodel import Session, select, col, or_
from sqlalchemy import func
from . import models


class FacultyStore(Protocol):
    def save(self, faculty: models.Faculty) -> models.Faculty: ...
    def get(self, faculty_id: int) -> Optional[models.Faculty]: ...
    def list_all(self) -> List[models.Faculty]: ...
    def list_by_color(self, color: str) -> List[models.Faculty]: ...
    def search(self, text: str) -> List[models.Faculty]: ...
    def delete(self, faculty: models.Faculty) -> None: ...
    def delete_all(self) -> None: ...


class StudentStore(Protocol):
    def save(self, student: models.Student) -> models.Student: ...
    def find_by_id(self, student_id: int) -> Optional[models.Student]: ...
    def find_by_age_between(self, min_age: int, max_age: int) -> List[models.Student]: ...
    def list_all(self) -> List[models.Student]: ...
    def list_by_faculty(self, faculty_id: int) -> List[models.Student]: ...
    def count_by_faculty(self, faculty_id: int) -> int: ...
    def delete(self, student: models.Student) -> None: ...
    def delete_all(self) -> None: ...


class FacultyRepository:
    """CRUD operations for `Faculty` objects."""
    def __init__(self, session: Session):
        self.session = session

    def save(self, faculty: models.Faculty) -> models.Faculty:
        """Insert or update `faculty` and return the managed instance.

        A faculty without an id gets a fresh one from the database; the
        remaining fields are stored as given.
        """
        self.session.add(faculty)
        self.session.commit()
        self.session.refresh(faculty)
        return faculty

    def get(self, faculty_id: int) -> Optional[models.Faculty]:
        """Get a `Faculty` by primary key."""
        return self.session.get(models.Faculty, faculty_id)

    def list_all(self) -> List[models.Faculty]:
        stmt = select(models.Faculty).order_by(models.Faculty.id)
        return list(self.session.exec(stmt).all())

    def list_by_color(self, color: str) -> List[models.Faculty]:
        """Return faculties whose color matches `color`, ignoring case."""
        stmt = select(models.Faculty).where(func.lower(models.Faculty.color) == color.lower())
        return list(self.session.exec(stmt).all())

    def search(self, text: str) -> List[models.Faculty]:
        """Return faculties whose name or color contains `text`, ignoring case."""
        pattern = f"%{text}%"
        stmt = select(models.Faculty).where(
            or_(
                col(models.Faculty.name).ilike(pattern),
                col(models.Faculty.color).ilike(pattern),
            )
        ).order_by(models.Faculty.id)
        return list(self.session.exec(stmt).all())

    def delete(self, faculty: models.Faculty) -> None:
        self.session.delete(faculty)
        self.session.commit()

    def delete_all(self) -> None:
        """Remove every faculty row.

        Students referencing a faculty must be removed first; the foreign
        key rejects the delete with `IntegrityError` otherwise.
        """
        for faculty in self.session.exec(select(models.Faculty)).all():
            self.session.delete(faculty)
        self.session.commit()


class StudentRepository:
    """CRUD and range queries for `Student` objects."""
    def __init__(self, session: Session):
        self.session = session

    def save(self, student: models.Student) -> models.Student:
        """Insert or update `student` and return the managed instance."""
        self.session.add(student)
        self.session.commit()
        self.session.refresh(student)
        return student

    def find_by_id(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key or `None` if not found."""
        return self.session.get(models.Student, student_id)

    def find_by_age_between(self, min_age: int, max_age: int) -> List[models.Student]:
        """Return students with `min_age <= age <= max_age`.

        Both bounds are inclusive. An inverted range simply matches
        nothing.
        """
        stmt = select(models.Student).where(col(models.Student.age).between(min_age, max_age))
        return list(self.session.exec(stmt).all())

    def list_all(self) -> List[models.Student]:
        stmt = select(models.Student).order_by(models.Student.id)
        return list(self.session.exec(stmt).all())

    def list_by_faculty(self, faculty_id: int) -> List[models.Student]:
        """List all students linked to `faculty_id`."""
        stmt = select(models.Student).where(models.Student.faculty_id == faculty_id)
        return list(self.session.exec(stmt).all())

    def count_by_faculty(self, faculty_id: int) -> int:
        stmt = select(func.count()).select_from(models.Student).where(models.Student.faculty_id == faculty_id)
        return self.session.exec(stmt).one()

    def delete(self, student: models.Student) -> None:
        self.session.delete(student)
        self.session.commit()

    def delete_all(self) -> None:
        """Remove every student row."""
        for student in self.session.exec(select(models.Student)).all():
            self.session.delete(student)
        self.session.commit()
