"""SQLModel data models.

This module defines the application's database tables using SQLModel.
A `Faculty` groups any number of `Student` rows; the link is the
nullable `student.faculty_id` foreign key. Deleting a faculty that still
has students is rejected by the database rather than unlinking them.
"""

from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship


class Faculty(SQLModel, table=True):
    """A faculty (house) students can belong to.

    Fields:
    - `name`: display name, e.g. "Gryffindor"
    - `color`: free-form color name, e.g. "red"
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    color: str = Field(index=True)
    # leave linked rows alone on delete so the foreign key can refuse it
    students: List['Student'] = Relationship(
        back_populates='faculty',
        sa_relationship_kwargs={'passive_deletes': 'all'},
    )


class Student(SQLModel, table=True):
    """A student, optionally linked to a `Faculty`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    age: int = Field(index=True)
    faculty_id: Optional[int] = Field(default=None, foreign_key='faculty.id', index=True)
    faculty: Optional[Faculty] = Relationship(back_populates='students')
