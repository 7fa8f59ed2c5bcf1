"""Class state container used by the class list and class pages."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..schemas import ClassCreate, ClassFilters, ClassRead, ClassUpdate
from ..tables.table_state import SortState, sort_records
from ..utils.case_converter import CaseType, convert_case
from . import class_service
from .base_store import SessionStore
from .class_service import ClassRuleViolation


def to_class_record(row: tuple[Any, int]) -> dict[str, Any]:
    classroom, student_count = row
    return convert_case(ClassRead.from_row(classroom, student_count).model_dump(mode="json"), CaseType.CAMEL)


def sort_class_records(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Order by grade, then by name within a grade."""

    return sort_records(sort_records(records, SortState("name")), SortState("gradeId"))


class ClassStore(SessionStore):
    """Class list, currently opened class, loading flag and last error."""

    rule_errors = (ClassRuleViolation,)

    def __init__(self, session_factory, current_user) -> None:
        super().__init__(session_factory, current_user)
        self.classes: list[dict[str, Any]] = []
        self.current_class: Optional[dict[str, Any]] = None

    def fetch_classes(self, filters: Optional[ClassFilters] = None) -> list[dict[str, Any]]:
        """Load the classes of the current user's school."""

        user = self._current_user()
        scoped = (filters or ClassFilters()).model_copy(update={"school_id": user.school_id})

        def action(session: Session) -> list[dict[str, Any]]:
            return [to_class_record(row) for row in class_service.list_classes(session, filters=scoped)]

        records = self._run(action, "An error occurred while fetching classes")
        if records is not None:
            self.classes = records
        return self.classes

    def fetch_class_by_id(self, class_id: UUID) -> Optional[dict[str, Any]]:
        def action(session: Session) -> dict[str, Any]:
            return to_class_record(class_service.get_class(session, class_id))

        record = self._run(action, f"An error occurred while fetching class with ID {class_id}")
        if record is not None:
            self.current_class = record
        return record

    def create_class(self, payload: ClassCreate) -> bool:
        user = self._current_user()
        data = payload.model_copy(update={"school_id": payload.school_id or user.school_id})

        def action(session: Session) -> dict[str, Any]:
            return to_class_record(class_service.create_class(session, data, created_by=user.user_id))

        record = self._run(action, "An error occurred while creating the class")
        if record is None:
            return False
        self.classes = sort_class_records([*self.classes, record])
        return True

    def update_class(self, class_id: UUID, changes: ClassUpdate) -> bool:
        user = self._current_user()

        def action(session: Session) -> dict[str, Any]:
            return to_class_record(class_service.update_class(session, class_id, changes, updated_by=user.user_id))

        record = self._run(action, f"An error occurred while updating class with ID {class_id}")
        if record is None:
            return False
        for index, existing in enumerate(self.classes):
            if existing["id"] == record["id"]:
                self.classes[index] = record
                break
        return True

    def clear_current_class(self) -> None:
        self.current_class = None
