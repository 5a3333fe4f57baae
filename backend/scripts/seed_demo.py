"""CLI script to fill the backend DB with demo faculties and students.
Usage: python scripts/seed_demo.py [--students N] [--faculties N] [--seed S]
"""
import sys
import argparse
import pathlib
import random
from typing import Optional
# Ensure `backend/` is on sys.path so `campus` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from campus import models
from campus.database import engine, create_db_and_tables
from campus.repositories import FacultyRepository, StudentRepository
from campus.services import FacultyService, StudentService

HOUSES = [
    ("Gryffindor", "red"),
    ("Hufflepuff", "yellow"),
    ("Ravenclaw", "blue"),
    ("Slytherin", "green"),
]
FIRST_NAMES = ["Harry", "Hermione", "Ron", "Luna", "Neville", "Cedric", "Draco", "Cho", "Ginny", "Fred"]
LAST_NAMES = ["Potter", "Granger", "Weasley", "Lovegood", "Longbottom", "Diggory", "Malfoy", "Chang"]
COLORS = ["red", "yellow", "blue", "green", "silver", "bronze", "black", "white"]


def main(students: int = 50, faculties: Optional[int] = None, seed: Optional[int] = None):
    """Create faculties and randomly assigned students through the services.

    Without `faculties` the four Hogwarts houses are created; otherwise
    that many faculties get generated names. Student ages are drawn from
    11..17 to match the school years.
    """
    rng = random.Random(seed)
    if faculties is None:
        specs = HOUSES
    else:
        specs = [(f"Faculty {i + 1}", rng.choice(COLORS)) for i in range(faculties)]
    create_db_and_tables()
    with Session(engine) as session:
        faculty_repo = FacultyRepository(session)
        student_repo = StudentRepository(session)
        faculty_svc = FacultyService(faculty_repo, student_repo)
        student_svc = StudentService(student_repo, faculty_repo)
        created_faculties = [faculty_svc.create(models.Faculty(name=n, color=c)) for n, c in specs]
        if not created_faculties and students:
            print('No faculties to assign students to')
            return
        for _ in range(students):
            faculty = rng.choice(created_faculties)
            student_svc.create(models.Student(
                name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                age=rng.randint(11, 17),
                faculty_id=faculty.id,
            ))
        for faculty in created_faculties:
            count = student_repo.count_by_faculty(faculty.id)
            print(f'{faculty.name} ({faculty.color}): {count} students')
        print(f'Total created: {len(created_faculties)} faculties, {students} students')


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--students', type=int, default=50, help='Number of students to create')
    parser.add_argument('--faculties', type=int, help='Generate this many faculties instead of the four houses')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible data')
    args = parser.parse_args()
    main(students=args.students, faculties=args.faculties, seed=args.seed)
