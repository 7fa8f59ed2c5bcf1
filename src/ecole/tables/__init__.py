"""Client-side table state engine for list views."""

from .columns import CLASS_COLUMNS, STUDENT_COLUMNS, ColumnDefinition
from .filters import FilterState, RecordFilter, TogglePolicy, class_filter, student_filter
from .table_state import SortDirection, SortState, TableState, TableView, class_table, sort_records, student_table

__all__ = [
    "CLASS_COLUMNS",
    "ColumnDefinition",
    "FilterState",
    "RecordFilter",
    "STUDENT_COLUMNS",
    "SortDirection",
    "SortState",
    "TableState",
    "TableView",
    "TogglePolicy",
    "class_filter",
    "class_table",
    "sort_records",
    "student_filter",
    "student_table",
]
