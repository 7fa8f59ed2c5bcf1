"""Student state container used by list and detail views."""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from ..schemas import (
    StudentCreate,
    StudentCreateForm,
    StudentDetail,
    StudentFilters,
    StudentFormPayload,
    StudentRead,
    StudentUpdate,
)
from ..utils.case_converter import CaseType, convert_case
from ..utils.datetime import get_age
from . import link_service, student_service
from .base_store import CurrentUser, SessionStore
from .link_service import LinkRuleViolation
from .student_service import StudentRuleViolation

__all__ = ["CurrentUser", "StudentStore", "to_record"]

logger = logging.getLogger(__name__)

_FORM_ADAPTER = TypeAdapter(StudentFormPayload)


def to_record(model: StudentRead) -> dict[str, Any]:
    """Turn a student payload into the camelCase record used by list views."""

    record = convert_case(model.model_dump(mode="json"), CaseType.CAMEL)
    record["age"] = get_age(model.date_of_birth) if model.date_of_birth else None
    return record


class StudentStore(SessionStore):
    """Explicit replacement for an ambient global store.

    Holds the student list and the currently opened student as camelCase
    records, a loading flag and the last error message. Every action runs in
    its own session and commits or rolls back before returning.
    """

    rule_errors = (StudentRuleViolation, LinkRuleViolation)

    def __init__(self, session_factory, current_user) -> None:
        super().__init__(session_factory, current_user)
        self.students: list[dict[str, Any]] = []
        self.current_student: Optional[dict[str, Any]] = None

    def get_student_by_id(self, student_id: str | UUID) -> Optional[dict[str, Any]]:
        key = str(student_id)
        return next((student for student in self.students if student["id"] == key), None)

    def update_local_student_list(self, record: dict[str, Any], *, append: bool = True) -> None:
        if not record.get("id"):
            logger.error("student id is required for updating local student list")
            return
        for index, student in enumerate(self.students):
            if student["id"] == record["id"]:
                self.students[index] = {**student, **record}
                break
        else:
            if append:
                self.students.append(record)
        if self.current_student and self.current_student["id"] == record["id"]:
            self.current_student = {**self.current_student, **record}

    def fetch_students(self, filters: Optional[StudentFilters] = None) -> list[dict[str, Any]]:
        """Load the students of the current user's school."""

        user = self._current_user()
        scoped = (filters or StudentFilters()).model_copy(update={"school_id": user.school_id})

        def action(session: Session) -> list[dict[str, Any]]:
            rows = student_service.list_students(session, filters=scoped)
            return [to_record(StudentRead.model_validate(row)) for row in rows]

        records = self._run(action, "An error occurred while fetching students")
        if records is not None:
            self.students = records
        return self.students

    def fetch_student_by_id(self, student_id: UUID) -> Optional[dict[str, Any]]:
        def action(session: Session) -> dict[str, Any]:
            student = student_service.get_student(session, student_id)
            return to_record(StudentDetail.model_validate(student))

        record = self._run(action, f"An error occurred while fetching student with ID {student_id}")
        if record is not None:
            self.current_student = record
        return record

    def create_student(self, payload: StudentCreate) -> bool:
        user = self._current_user()
        data = payload.model_copy(update={"school_id": payload.school_id or user.school_id})

        def action(session: Session) -> dict[str, Any]:
            student = student_service.create_student(session, data, created_by=user.user_id)
            return to_record(StudentRead.model_validate(student))

        record = self._run(action, "An error occurred while creating the student")
        if record is None:
            return False
        self.update_local_student_list(record)
        return True

    def update_student(self, student_id: UUID, changes: StudentUpdate) -> bool:
        user = self._current_user()

        def action(session: Session) -> dict[str, Any]:
            student = student_service.update_student(session, student_id, changes, updated_by=user.user_id)
            return to_record(StudentRead.model_validate(student))

        record = self._run(action, "An unexpected error occurred")
        if record is None:
            return False
        self.update_local_student_list(record)
        return True

    def save(self, payload: Any) -> bool:
        """Dispatch a form payload on its ``kind`` tag."""

        form = _FORM_ADAPTER.validate_python(payload)
        if isinstance(form, StudentCreateForm):
            return self.create_student(StudentCreate.model_validate(form.model_dump(exclude={"kind"})))
        return self.update_student(form.student_id, form.changes)

    def link_student_and_parent(self, student_id: UUID, otp: str) -> bool:
        def action(session: Session) -> dict[str, Any]:
            link = link_service.redeem_link_code(session, student_id=student_id, otp=otp)
            return {"id": str(student_id), "parentId": str(link.parent_id)}

        record = self._run(action, "Failed to link student and parent")
        if record is None:
            return False
        self.update_local_student_list(record, append=False)
        return True
