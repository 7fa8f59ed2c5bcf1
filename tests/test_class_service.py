import uuid

import pytest
from pydantic import ValidationError

from ecole.schemas import ClassCreate, ClassFilters, ClassUpdate
from ecole.services import class_service
from ecole.services.class_service import CLASS_NOT_FOUND, ClassRuleViolation

SCHOOL_ID = uuid.UUID("1b9a7e2d-6c3f-4d8e-9a0b-2c4d6e8f0a1b")
OTHER_SCHOOL_ID = uuid.UUID("5d4c3b2a-1908-4f7e-a6d5-c4b3a2918070")


@pytest.fixture()
def grades(make_grade):
    return make_grade(1, "6ème"), make_grade(2, "5ème")


def test_list_counts_students_and_names_the_main_teacher(session, grades, make_classroom, make_teacher, make_student):
    teacher = make_teacher()
    six_a = make_classroom("6ème A", grade_id=1, school_id=SCHOOL_ID, main_teacher_id=teacher.id)
    make_classroom("5ème A", grade_id=2, school_id=SCHOOL_ID)
    make_student(class_id=six_a.id)
    make_student(class_id=six_a.id)

    rows = class_service.list_classes(session, filters=ClassFilters(school_id=SCHOOL_ID))

    assert [(classroom.name, count) for classroom, count in rows] == [("6ème A", 2), ("5ème A", 0)]
    assert rows[0][0].main_teacher.first_name == "Koffi"


def test_list_filters(session, grades, make_classroom):
    make_classroom("6ème A", grade_id=1, school_id=SCHOOL_ID)
    make_classroom("6ème B", grade_id=1, school_id=SCHOOL_ID)
    make_classroom("5ème A", grade_id=2, school_id=SCHOOL_ID)
    make_classroom("6ème A", grade_id=1, school_id=OTHER_SCHOOL_ID)

    by_school = class_service.list_classes(session, filters=ClassFilters(school_id=OTHER_SCHOOL_ID))
    by_grade = class_service.list_classes(session, filters=ClassFilters(school_id=SCHOOL_ID, grade_id=2))
    by_name = class_service.list_classes(session, filters=ClassFilters(school_id=SCHOOL_ID, name="b"))

    assert [classroom.school_id for classroom, _ in by_school] == [OTHER_SCHOOL_ID]
    assert [classroom.name for classroom, _ in by_grade] == ["5ème A"]
    assert [classroom.name for classroom, _ in by_name] == ["6ème B"]


def test_get_unknown_class(session):
    with pytest.raises(ClassRuleViolation) as excinfo:
        class_service.get_class(session, uuid.uuid4())

    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == CLASS_NOT_FOUND


def test_create_class(session, grades, make_teacher):
    teacher = make_teacher()
    payload = ClassCreate(name="  6ème C ", grade_id=1, school_id=SCHOOL_ID, main_teacher_id=teacher.id)

    classroom, count = class_service.create_class(session, payload, created_by=teacher.id)
    session.commit()

    assert classroom.name == "6ème C"
    assert classroom.created_by == teacher.id
    assert count == 0


def test_create_rejects_duplicate_names_within_a_school(session, make_classroom):
    make_classroom("6ème A", school_id=SCHOOL_ID)

    with pytest.raises(ClassRuleViolation) as excinfo:
        class_service.create_class(session, ClassCreate(name="6ème A", school_id=SCHOOL_ID))

    assert excinfo.value.status_code == 409
    assert excinfo.value.detail == "Une classe nommée 6ème A existe déjà."
    class_service.create_class(session, ClassCreate(name="6ème A", school_id=OTHER_SCHOOL_ID))


def test_create_rejects_unknown_main_teacher(session):
    with pytest.raises(ClassRuleViolation) as excinfo:
        class_service.create_class(session, ClassCreate(name="6ème A", main_teacher_id=uuid.uuid4()))

    assert excinfo.value.status_code == 404


def test_update_changes_only_the_given_fields(session, grades, make_classroom, make_teacher):
    teacher = make_teacher()
    classroom = make_classroom("6ème A", grade_id=1, school_id=SCHOOL_ID, description="Salle 12")

    updated, _ = class_service.update_class(
        session, classroom.id, ClassUpdate(main_teacher_id=teacher.id), updated_by=teacher.id
    )
    session.commit()

    assert updated.main_teacher.last_name == "Yao"
    assert updated.description == "Salle 12"
    assert updated.updated_by == teacher.id


def test_rename_to_an_existing_name_conflicts(session, make_classroom):
    make_classroom("6ème A", school_id=SCHOOL_ID)
    classroom = make_classroom("6ème B", school_id=SCHOOL_ID)

    class_service.update_class(session, classroom.id, ClassUpdate(name="6ème B"))
    with pytest.raises(ClassRuleViolation) as excinfo:
        class_service.update_class(session, classroom.id, ClassUpdate(name="6ème A"))

    assert excinfo.value.status_code == 409


def test_update_requires_a_field():
    with pytest.raises(ValidationError, match="Il faut au moins un champ à mettre à jour"):
        ClassUpdate()


def test_classes_grouped_by_grade(session, grades, make_classroom, make_student):
    six_b = make_classroom("6ème B", grade_id=1, school_id=SCHOOL_ID)
    six_a = make_classroom("6ème A", grade_id=1, school_id=SCHOOL_ID)
    make_classroom("5ème A", grade_id=2, school_id=SCHOOL_ID)
    make_classroom("Sans niveau", school_id=SCHOOL_ID)
    make_classroom("6ème A", grade_id=1, school_id=OTHER_SCHOOL_ID)
    make_student(class_id=six_a.id)
    make_student(class_id=six_b.id)
    make_student(class_id=six_b.id)

    groups = class_service.classes_grouped_by_grade(session, SCHOOL_ID)

    assert [(group.id, group.name, group.count) for group in groups] == [("0", "6ème", 3), ("1", "5ème", 0)]
    assert [subclass.id for subclass in groups[0].subclasses] == [six_a.id, six_b.id]
