from unittest.mock import MagicMock

import pytest

from campus import models
from campus.exceptions import ConflictError, NotFoundError, ValidationError
from campus.services import FacultyService, StudentService


def _student_service(faculty_exists=True):
    student_repo = MagicMock()
    student_repo.save.side_effect = lambda s: s
    faculty_repo = MagicMock()
    faculty_repo.get.return_value = models.Faculty(id=7, name='Gryffindor', color='red') if faculty_exists else None
    return StudentService(student_repo, faculty_repo), student_repo, faculty_repo


def test_create_discards_incoming_id_and_checks_faculty():
    svc, student_repo, faculty_repo = _student_service()
    created = svc.create(models.Student(id=99, name='Harry', age=11, faculty_id=7))
    assert created.id is None
    faculty_repo.get.assert_called_once_with(7)
    student_repo.save.assert_called_once()


def test_create_with_unknown_faculty_raises_not_found():
    svc, student_repo, _ = _student_service(faculty_exists=False)
    with pytest.raises(NotFoundError):
        svc.create(models.Student(name='Harry', age=11, faculty_id=3))
    student_repo.save.assert_not_called()


def test_create_without_faculty_skips_lookup():
    svc, _, faculty_repo = _student_service()
    svc.create(models.Student(name='Harry', age=11))
    faculty_repo.get.assert_not_called()


def test_update_replaces_fields_and_keeps_id():
    svc, student_repo, _ = _student_service()
    existing = models.Student(id=5, name='Ron', age=12, faculty_id=1)
    student_repo.find_by_id.return_value = existing
    updated = svc.update(5, models.Student(id=42, name='Ronald', age=13, faculty_id=7))
    assert updated is existing
    assert (updated.id, updated.name, updated.age, updated.faculty_id) == (5, 'Ronald', 13, 7)


def test_update_missing_student_raises_not_found():
    svc, student_repo, _ = _student_service()
    student_repo.find_by_id.return_value = None
    with pytest.raises(NotFoundError) as excinfo:
        svc.update(5, models.Student(name='Ronald', age=13))
    assert excinfo.value.entity == 'student'
    student_repo.save.assert_not_called()


def test_find_by_age_range_delegates_to_repository():
    svc, student_repo, _ = _student_service()
    student_repo.find_by_age_between.return_value = []
    assert svc.find_by_age_range(14, 17) == []
    student_repo.find_by_age_between.assert_called_once_with(14, 17)


def test_faculty_delete_is_refused_while_students_are_linked():
    faculty_repo = MagicMock()
    faculty_repo.get.return_value = models.Faculty(id=1, name='Hufflepuff', color='yellow')
    student_repo = MagicMock()
    student_repo.count_by_faculty.return_value = 3
    svc = FacultyService(faculty_repo, student_repo)
    with pytest.raises(ConflictError):
        svc.delete(1)
    faculty_repo.delete.assert_not_called()

    student_repo.count_by_faculty.return_value = 0
    svc.delete(1)
    faculty_repo.delete.assert_called_once()


def test_faculty_list_rejects_color_and_search_together():
    svc = FacultyService(MagicMock(), MagicMock())
    with pytest.raises(ValidationError):
        svc.list(color='red', search='Gryffindor')


def test_faculty_students_of_missing_faculty():
    faculty_repo = MagicMock()
    faculty_repo.get.return_value = None
    student_repo = MagicMock()
    svc = FacultyService(faculty_repo, student_repo)
    with pytest.raises(NotFoundError):
        svc.students(8)
    student_repo.list_by_faculty.assert_not_called()
