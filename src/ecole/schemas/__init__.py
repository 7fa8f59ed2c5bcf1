"""Public schema exports."""

from .classroom import ClassCreate, ClassFilters, ClassRead, ClassUpdate, GradeGroup, SubclassSummary
from .imports import ImportBanner, ImportFileProblem, ImportReport, ImportRowError
from .link import LinkResult, LinkStudentParentRequest
from .performance import AttendanceStats, PerformanceSnapshot
from .student import (
    ParentSummary,
    StudentCreate,
    StudentCreateForm,
    StudentDetail,
    StudentFilters,
    StudentFormPayload,
    StudentImportRow,
    StudentRead,
    StudentUpdate,
    StudentUpdateForm,
)

__all__ = [
    "AttendanceStats",
    "ClassCreate",
    "ClassFilters",
    "ClassRead",
    "ClassUpdate",
    "GradeGroup",
    "ImportBanner",
    "ImportFileProblem",
    "ImportReport",
    "ImportRowError",
    "LinkResult",
    "LinkStudentParentRequest",
    "ParentSummary",
    "PerformanceSnapshot",
    "StudentCreate",
    "StudentCreateForm",
    "StudentDetail",
    "StudentFilters",
    "StudentFormPayload",
    "StudentImportRow",
    "StudentRead",
    "StudentUpdate",
    "StudentUpdateForm",
    "SubclassSummary",
]
