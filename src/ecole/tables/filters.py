"""Filter predicates for student and class list views."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional


def read_field(record: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""

    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


class TogglePolicy(str, enum.Enum):
    """How active "unassigned only" toggles combine with the other filters.

    RESTRICT: toggles, text search and class membership must all hold.
    REPLACE_SEARCH: while a toggle is active the text search is ignored;
    toggles and class membership must hold.
    """

    RESTRICT = "restrict"
    REPLACE_SEARCH = "replace_search"


@dataclass
class FilterState:
    """User-controlled filter inputs of a list view."""

    search_term: str = ""
    selected_class_ids: set[str] = field(default_factory=set)
    toggles: dict[str, bool] = field(default_factory=dict)

    def reset(self) -> None:
        self.search_term = ""
        self.selected_class_ids = set()

    @property
    def active_toggles(self) -> list[str]:
        return [name for name, enabled in self.toggles.items() if enabled]


class RecordFilter:
    """Boolean predicate combining text search, class membership and toggles."""

    def __init__(
        self,
        search_fields: Iterable[str],
        *,
        group_field: Optional[str] = None,
        toggle_fields: Optional[Mapping[str, str]] = None,
        toggle_policy: TogglePolicy = TogglePolicy.RESTRICT,
    ) -> None:
        self.search_fields = tuple(search_fields)
        self.group_field = group_field
        self.toggle_fields = dict(toggle_fields or {})
        self.toggle_policy = TogglePolicy(toggle_policy)

    def matches_search(self, record: Any, term: str) -> bool:
        needle = term.lower()
        if not needle:
            return True
        for name in self.search_fields:
            value = read_field(record, name)
            if value is not None and needle in str(value).lower():
                return True
        return False

    def matches_group(self, record: Any, selected: set[str]) -> bool:
        if not selected or self.group_field is None:
            return True
        value = read_field(record, self.group_field)
        return (value if value is not None else "") in selected

    def matches_toggles(self, record: Any, active: Iterable[str]) -> bool:
        for name in active:
            field_name = self.toggle_fields.get(name)
            if field_name is None:
                raise KeyError(f"Unknown filter toggle: {name}")
            if read_field(record, field_name) is not None:
                return False
        return True

    def __call__(self, record: Any, state: FilterState) -> bool:
        active = state.active_toggles
        if not self.matches_toggles(record, active):
            return False
        if not self.matches_group(record, state.selected_class_ids):
            return False
        if active and self.toggle_policy is TogglePolicy.REPLACE_SEARCH:
            return True
        return self.matches_search(record, state.search_term)

    def apply(self, records: Iterable[Any], state: FilterState) -> list[Any]:
        return [record for record in records if self(record, state)]


def student_filter(toggle_policy: TogglePolicy = TogglePolicy.RESTRICT) -> RecordFilter:
    return RecordFilter(
        ("lastName", "firstName", "idNumber"),
        group_field="classId",
        toggle_fields={"without_parent": "parentId", "without_class": "classId"},
        toggle_policy=toggle_policy,
    )


def class_filter(toggle_policy: TogglePolicy = TogglePolicy.RESTRICT) -> RecordFilter:
    return RecordFilter(
        ("name",),
        toggle_fields={"without_main_teacher": "mainTeacherId"},
        toggle_policy=toggle_policy,
    )
