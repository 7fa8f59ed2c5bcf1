"""Domain logic for classes."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from ..models import Classroom, Grade, Student, User
from ..schemas import ClassCreate, ClassFilters, ClassUpdate, GradeGroup, SubclassSummary
from ..utils.changed_fields import get_changed_fields

CLASS_NOT_FOUND = "Cette classe n'existe pas"


class ClassRuleViolation(Exception):
    """Raised when class business rules are violated."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _student_count():
    return (
        select(func.count(Student.id))
        .where(Student.class_id == Classroom.id)
        .correlate(Classroom)
        .scalar_subquery()
        .label("student_count")
    )


def list_classes(
    session: Session,
    *,
    filters: Optional[ClassFilters] = None,
) -> Sequence[tuple[Classroom, int]]:
    """Return ``(class, student count)`` pairs ordered by grade, then name."""

    stmt = (
        select(Classroom, _student_count())
        .options(joinedload(Classroom.main_teacher))
        .order_by(Classroom.grade_id.asc(), Classroom.name.asc())
    )

    filters = filters or ClassFilters()
    if filters.name:
        stmt = stmt.where(Classroom.name.ilike(f"%{filters.name}%"))
    if filters.grade_id is not None:
        stmt = stmt.where(Classroom.grade_id == filters.grade_id)
    if filters.school_id:
        stmt = stmt.where(Classroom.school_id == filters.school_id)

    return [(classroom, count) for classroom, count in session.execute(stmt).all()]


def get_class(session: Session, class_id: UUID) -> tuple[Classroom, int]:
    stmt = (
        select(Classroom, _student_count())
        .options(joinedload(Classroom.main_teacher))
        .where(Classroom.id == class_id)
    )
    row = session.execute(stmt).first()
    if row is None:
        raise ClassRuleViolation(CLASS_NOT_FOUND, status_code=404)
    return row[0], row[1]


def _check_main_teacher(session: Session, teacher_id: Optional[UUID]) -> None:
    if teacher_id is not None and session.get(User, teacher_id) is None:
        raise ClassRuleViolation("Cet enseignant n'existe pas", status_code=404)


def _check_unique_name(session: Session, name: str, school_id: Optional[UUID], exclude: Optional[UUID] = None) -> None:
    stmt = select(Classroom.id).where(Classroom.name == name, Classroom.school_id == school_id)
    if exclude is not None:
        stmt = stmt.where(Classroom.id != exclude)
    if session.execute(stmt).first() is not None:
        raise ClassRuleViolation(f"Une classe nommée {name} existe déjà.", status_code=409)


def create_class(
    session: Session,
    payload: ClassCreate,
    *,
    created_by: Optional[UUID] = None,
) -> tuple[Classroom, int]:
    """Insert a class; names are unique within a school."""

    _check_unique_name(session, payload.name, payload.school_id)
    _check_main_teacher(session, payload.main_teacher_id)

    classroom = Classroom(**payload.model_dump(), created_by=created_by, updated_by=created_by)
    session.add(classroom)
    session.flush()
    session.refresh(classroom)
    return classroom, 0


def update_class(
    session: Session,
    class_id: UUID,
    payload: ClassUpdate,
    *,
    updated_by: Optional[UUID] = None,
) -> tuple[Classroom, int]:
    """Apply the fields of ``payload`` that differ from the stored values."""

    classroom, _ = get_class(session, class_id)
    requested = payload.changes()
    changed = get_changed_fields(requested, {key: getattr(classroom, key) for key in requested})

    if "name" in changed:
        _check_unique_name(session, changed["name"], classroom.school_id, exclude=classroom.id)
    if "main_teacher_id" in changed:
        _check_main_teacher(session, changed["main_teacher_id"])

    for key, value in changed.items():
        setattr(classroom, key, value)
    if changed:
        classroom.updated_by = updated_by
        session.flush()
        session.expire(classroom, ["main_teacher"])
    return get_class(session, class_id)


def classes_grouped_by_grade(session: Session, school_id: UUID) -> list[GradeGroup]:
    """Group a school's classes under their grade level.

    ``count`` is the number of students enrolled across the grade's classes.
    Classes without a grade are left out.
    """

    stmt = (
        select(Grade.id, Grade.name, Classroom.id, Classroom.name, _student_count())
        .join(Classroom, Classroom.grade_id == Grade.id)
        .where(Classroom.school_id == school_id)
        .order_by(Grade.id.asc(), Classroom.name.asc())
    )

    groups: list[GradeGroup] = []
    current_grade = None
    for grade_id, grade_name, class_id, class_name, count in session.execute(stmt).all():
        if grade_id != current_grade:
            current_grade = grade_id
            groups.append(GradeGroup(id=str(len(groups)), name=grade_name, count=0, subclasses=[]))
        group = groups[-1]
        group.count += count or 0
        group.subclasses.append(SubclassSummary(id=class_id, name=class_name))
    return groups
