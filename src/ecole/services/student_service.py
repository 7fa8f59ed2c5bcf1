"""Domain logic for student records."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, joinedload

from ..models import Student
from ..schemas import StudentCreate, StudentFilters, StudentUpdate
from ..utils.changed_fields import get_changed_fields
from ..utils.datetime import utc_now


class StudentRuleViolation(Exception):
    """Raised when student business rules are violated."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def list_students(
    session: Session,
    *,
    filters: Optional[StudentFilters] = None,
    limit: int = 100,
    offset: int = 0,
) -> Sequence[Student]:
    """Retrieve students matching the optional filters, ordered by name."""

    stmt = (
        select(Student)
        .options(joinedload(Student.classroom))
        .order_by(Student.last_name.asc(), Student.first_name.asc(), Student.id.asc())
        .offset(offset)
        .limit(limit)
    )

    filters = filters or StudentFilters()
    if filters.name:
        pattern = f"%{filters.name}%"
        stmt = stmt.where(or_(Student.first_name.ilike(pattern), Student.last_name.ilike(pattern)))
    if filters.id_number:
        stmt = stmt.where(Student.id_number.ilike(f"%{filters.id_number}%"))
    if filters.class_id:
        stmt = stmt.where(Student.class_id == filters.class_id)
    if filters.school_id:
        stmt = stmt.where(Student.school_id == filters.school_id)

    today = utc_now().date()
    if filters.age_min is not None:
        stmt = stmt.where(Student.date_of_birth <= _years_before(today, filters.age_min))
    if filters.age_max is not None:
        stmt = stmt.where(Student.date_of_birth > _years_before(today, filters.age_max + 1))

    return session.execute(stmt).scalars().all()


def get_student(session: Session, student_id: UUID) -> Student:
    stmt = (
        select(Student)
        .options(joinedload(Student.classroom), joinedload(Student.parent))
        .where(Student.id == student_id)
    )
    student = session.execute(stmt).scalar_one_or_none()
    if student is None:
        raise StudentRuleViolation(f"Student {student_id} not found", status_code=404)
    return student


def create_student(
    session: Session,
    payload: StudentCreate,
    *,
    created_by: Optional[UUID] = None,
) -> Student:
    """Insert a student, enforcing a unique ID number per school."""

    existing_stmt = select(Student.id).where(
        Student.id_number == payload.id_number,
        Student.school_id == payload.school_id,
    )
    if session.execute(existing_stmt).first() is not None:
        raise StudentRuleViolation(
            f"Un élève avec le matricule {payload.id_number} existe déjà.",
            status_code=409,
        )

    student = Student(**payload.model_dump(), created_by=created_by, updated_by=created_by)
    session.add(student)
    session.flush()
    session.refresh(student)
    return student


def update_student(
    session: Session,
    student_id: UUID,
    payload: StudentUpdate,
    *,
    updated_by: Optional[UUID] = None,
) -> Student:
    """Apply the fields of ``payload`` that differ from the stored values."""

    student = get_student(session, student_id)
    requested = payload.changes()
    current = {key: getattr(student, key) for key in requested}
    changed = get_changed_fields(requested, current)

    for key, value in changed.items():
        setattr(student, key, value)
    if changed:
        student.updated_by = updated_by
        session.flush()
        session.refresh(student)
    return student
