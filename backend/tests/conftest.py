from pathlib import Path
import os
import shutil
import tempfile
import pytest

TEST_DIR = Path(tempfile.mkdtemp(prefix="campus-tests-"))
TEST_DB = TEST_DIR / "campus.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"

from sqlmodel import Session
from campus.database import engine, create_db_and_tables, drop_db_and_tables
from campus.repositories import FacultyRepository, StudentRepository


@pytest.fixture(scope="session", autouse=True)
def reset_db():
    """Start the test run from empty tables in a temporary database file."""
    drop_db_and_tables()
    create_db_and_tables()
    yield
    engine.dispose()
    shutil.rmtree(TEST_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_tables():
    """Delete every student and faculty after each test, students first."""
    yield
    with Session(engine) as session:
        StudentRepository(session).delete_all()
        FacultyRepository(session).delete_all()


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s
