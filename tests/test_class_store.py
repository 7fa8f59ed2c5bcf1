import uuid

import pytest

from ecole.schemas import ClassCreate, ClassFilters, ClassUpdate
from ecole.services.class_store import ClassStore, sort_class_records
from ecole.services.student_store import CurrentUser

SCHOOL_ID = uuid.UUID("1b9a7e2d-6c3f-4d8e-9a0b-2c4d6e8f0a1b")
USER_ID = uuid.UUID("9f8e7d6c-5b4a-4392-8170-6f5e4d3c2b1a")


@pytest.fixture()
def store(session_factory, make_grade):
    make_grade(1, "6ème")
    make_grade(2, "5ème")
    return ClassStore(session_factory, lambda: CurrentUser(user_id=USER_ID, school_id=SCHOOL_ID))


def test_created_classes_are_kept_in_grade_then_name_order(store):
    assert store.create_class(ClassCreate(name="6ème B", grade_id=1))
    assert store.create_class(ClassCreate(name="5ème A", grade_id=2))
    assert store.create_class(ClassCreate(name="6ème A", grade_id=1))

    assert [record["name"] for record in store.classes] == ["6ème A", "6ème B", "5ème A"]
    assert store.classes[0]["schoolId"] == str(SCHOOL_ID)
    assert store.classes[0]["studentCount"] == 0
    assert store.error is None
    assert store.is_loading is False


def test_fetch_is_scoped_to_the_users_school(store, make_classroom):
    store.create_class(ClassCreate(name="6ème A", grade_id=1))
    make_classroom("6ème Z", grade_id=1, school_id=uuid.uuid4())

    classes = store.fetch_classes(ClassFilters(school_id=uuid.uuid4()))

    assert [record["name"] for record in classes] == ["6ème A"]


def test_update_replaces_the_listed_class(store, make_teacher):
    teacher = make_teacher()
    store.create_class(ClassCreate(name="6ème A", grade_id=1))
    class_id = uuid.UUID(store.classes[0]["id"])

    assert store.update_class(class_id, ClassUpdate(main_teacher_id=teacher.id))

    assert len(store.classes) == 1
    assert store.classes[0]["mainTeacherName"] == "Koffi Yao"


def test_rule_violations_set_the_error(store):
    store.create_class(ClassCreate(name="6ème A", grade_id=1))

    assert store.create_class(ClassCreate(name="6ème A", grade_id=2)) is False
    assert store.error == "Une classe nommée 6ème A existe déjà."
    assert len(store.classes) == 1

    store.clear_error()
    assert store.fetch_class_by_id(uuid.uuid4()) is None
    assert store.error == "Cette classe n'existe pas"


def test_current_class(store):
    store.create_class(ClassCreate(name="6ème A", grade_id=1))

    record = store.fetch_class_by_id(uuid.UUID(store.classes[0]["id"]))

    assert store.current_class == record
    store.clear_current_class()
    assert store.current_class is None


def test_sort_class_records():
    records = [
        {"name": "B", "gradeId": 2},
        {"name": "B", "gradeId": 1},
        {"name": "A", "gradeId": 2},
    ]

    assert sort_class_records(records) == [
        {"name": "B", "gradeId": 1},
        {"name": "A", "gradeId": 2},
        {"name": "B", "gradeId": 2},
    ]
