"""Filter -> sort -> paginate pipeline backing the list views.

Derived values are recomputed on every read, so a view always reflects the
current source list and state without explicit invalidation.
"""

from __future__ import annotations

import enum
import math
import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from numbers import Real
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

from ..core.config import get_settings
from .filters import FilterState, RecordFilter, class_filter, read_field, student_filter

T = TypeVar("T")


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class SortState:
    """Single active sort column."""

    column: str = "lastName"
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        self.direction = SortDirection(self.direction)


def collation_key(value: str) -> tuple[str, str]:
    """Accent- and case-insensitive primary key, exact string as tiebreak."""

    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), value


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def compare_values(left: Any, right: Any) -> int:
    """Three-way comparison; unlike types compare equal."""

    if isinstance(left, str) and isinstance(right, str):
        left_key, right_key = collation_key(left), collation_key(right)
    elif _is_number(left) and _is_number(right):
        left_key, right_key = left, right
    else:
        return 0
    return (left_key > right_key) - (left_key < right_key)


def sort_records(records: Iterable[T], sort: SortState) -> list[T]:
    """Stable sort on one column; equal keys keep their input order."""

    sign = -1 if sort.direction is SortDirection.DESC else 1

    def compare(left: T, right: T) -> int:
        return sign * compare_values(read_field(left, sort.column), read_field(right, sort.column))

    return sorted(records, key=cmp_to_key(compare))


class TableState(Generic[T]):
    """Pagination and row selection over an already filtered and sorted list."""

    def __init__(self, items_per_page: Optional[int] = None) -> None:
        self.current_page = 1
        self._items_per_page = 1
        self.items_per_page = get_settings().items_per_page if items_per_page is None else items_per_page
        self.sort = SortState()
        self.selected_rows: list[T] = []

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int) -> None:
        if value <= 0:
            raise ValueError("items_per_page must be a positive integer")
        self._items_per_page = value

    def on_page_change(self, page: int) -> None:
        if page < 1:
            raise ValueError("page numbers start at 1")
        self.current_page = page

    def page_count(self, total: int) -> int:
        return math.ceil(total / self.items_per_page)

    def page_from(self) -> int:
        return (self.current_page - 1) * self.items_per_page + 1

    def page_to(self, total: int) -> int:
        return min(self.current_page * self.items_per_page, total)

    def paginate(self, rows: Sequence[T]) -> list[T]:
        start = (self.current_page - 1) * self.items_per_page
        return list(rows[start:start + self.items_per_page])

    def select_row(self, row: T) -> None:
        # Selection is by identity; equal-looking rows are distinct entries.
        for index, item in enumerate(self.selected_rows):
            if item is row:
                del self.selected_rows[index]
                return
        self.selected_rows.append(row)

    def is_selected(self, row: T) -> bool:
        return any(item is row for item in self.selected_rows)

    def clear_selection(self) -> None:
        self.selected_rows = []


class TableView(Generic[T]):
    """Complete list view state: filters, sort, pagination and selection."""

    def __init__(
        self,
        source: Iterable[T],
        record_filter: RecordFilter,
        *,
        items_per_page: Optional[int] = None,
        sort: Optional[SortState] = None,
    ) -> None:
        self.source: list[T] = list(source)
        self.record_filter = record_filter
        self.filters = FilterState(toggles={name: False for name in record_filter.toggle_fields})
        self.state: TableState[T] = TableState(items_per_page)
        if sort is not None:
            self.state.sort = sort

    # -- filter inputs (each change returns to the first page) --

    @property
    def search_term(self) -> str:
        return self.filters.search_term

    @search_term.setter
    def search_term(self, value: str) -> None:
        self.filters.search_term = value
        self.state.current_page = 1

    @property
    def selected_class_ids(self) -> frozenset[str]:
        return frozenset(self.filters.selected_class_ids)

    @selected_class_ids.setter
    def selected_class_ids(self, value: Iterable[str]) -> None:
        self.filters.selected_class_ids = set(value)
        self.state.current_page = 1

    def toggle_class(self, class_id: str) -> None:
        self.filters.selected_class_ids ^= {class_id}
        self.state.current_page = 1

    def set_toggle(self, name: str, enabled: bool) -> None:
        if name not in self.record_filter.toggle_fields:
            raise KeyError(f"Unknown filter toggle: {name}")
        self.filters.toggles[name] = enabled
        self.state.current_page = 1

    def reset_filters(self) -> None:
        self.filters.reset()
        self.state.current_page = 1

    # -- sort and page size (page is kept) --

    @property
    def sort(self) -> SortState:
        return self.state.sort

    @sort.setter
    def sort(self, value: SortState) -> None:
        self.state.sort = value

    @property
    def items_per_page(self) -> int:
        return self.state.items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int) -> None:
        self.state.items_per_page = value

    @property
    def current_page(self) -> int:
        return self.state.current_page

    def on_page_change(self, page: int) -> None:
        self.state.on_page_change(page)

    def set_source(self, rows: Iterable[T]) -> None:
        self.source = list(rows)

    # -- derived values --

    @property
    def filtered(self) -> list[T]:
        return self.record_filter.apply(self.source, self.filters)

    @property
    def sorted_rows(self) -> list[T]:
        return sort_records(self.filtered, self.state.sort)

    @property
    def total(self) -> int:
        return len(self.filtered)

    @property
    def paginated(self) -> list[T]:
        return self.state.paginate(self.sorted_rows)

    @property
    def page_count(self) -> int:
        return self.state.page_count(self.total)

    @property
    def page_from(self) -> int:
        return self.state.page_from()

    @property
    def page_to(self) -> int:
        return self.state.page_to(self.total)

    # -- selection --

    @property
    def selected_rows(self) -> list[T]:
        return self.state.selected_rows

    def select_row(self, row: T) -> None:
        self.state.select_row(row)


def student_table(rows: Iterable[T], **kwargs: Any) -> TableView[T]:
    policy = kwargs.pop("toggle_policy", None)
    record_filter = student_filter(policy) if policy else student_filter()
    return TableView(rows, record_filter, **kwargs)


def class_table(rows: Iterable[T], **kwargs: Any) -> TableView[T]:
    policy = kwargs.pop("toggle_policy", None)
    record_filter = class_filter(policy) if policy else class_filter()
    return TableView(rows, record_filter, sort=kwargs.pop("sort", SortState(column="name")), **kwargs)
