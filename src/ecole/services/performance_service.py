"""Derived student analytics computed from attendance and marks."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..models import Student
from ..schemas import AttendanceStats, PerformanceSnapshot

PERFORMANCE_LEVELS: tuple[tuple[float, str], ...] = (
    (16, "Excellent"),
    (14, "Très bien"),
    (12, "Bien"),
    (10, "Assez bien"),
)
LOWEST_PERFORMANCE = "À améliorer"
NOT_AVAILABLE = "N/A"

_PERFORMANCE_COLORS = {
    "Excellent": "green",
    "Très bien": "lime",
    "Bien": "yellow",
    "Assez bien": "orange",
}
_ATTENDANCE_COLORS = {"present": "green", "absent": "red", "late": "yellow"}


class PerformanceError(Exception):
    """Raised when analytics cannot be produced for a student."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def _status(record: Any) -> str:
    status = _field(record, "status")
    return str(getattr(status, "value", status)).lower()


def attendance_stats(records: Iterable[Any]) -> AttendanceStats:
    """Count attendances by lowercase status (present, absent, late)."""

    counts = {"present": 0, "absent": 0, "late": 0}
    for record in records:
        counts[_status(record)] += 1
    return AttendanceStats(**counts)


def attendance_percentage(stats: AttendanceStats) -> str:
    total = stats.present + stats.absent + stats.late
    if total == 0:
        return "0"
    return f"{stats.present / total * 100:.1f}"


def round_half_up(value: float, places: int = 2) -> float:
    """Round halves away from zero (12.625 -> 12.63), unlike ``round``."""

    step = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


def _average(records: Sequence[Any]) -> float:
    return round_half_up(sum(_field(record, "note") for record in records) / len(records))


def participation_average(records: Iterable[Any]) -> float:
    items = list(records)
    if not items:
        return 0
    return _average(items)


def control_note_average(records: Iterable[Any]) -> Optional[float]:
    """Mean of control notes, or None when the student has none yet."""

    items = list(records)
    if not items:
        return None
    return _average(items)


def overall_performance(participation: float, control_average: Optional[float]) -> str:
    """Map the mean of both averages to a label; thresholds are inclusive lower bounds."""

    if control_average is None:
        return NOT_AVAILABLE
    average = (participation + control_average) / 2
    for threshold, label in PERFORMANCE_LEVELS:
        if average >= threshold:
            return label
    return LOWEST_PERFORMANCE


def performance_color(label: str) -> str:
    return _PERFORMANCE_COLORS.get(label, "red")


def attendance_color(status: str) -> str:
    return _ATTENDANCE_COLORS.get(status, "gray")


def grade_color(note: float) -> str:
    for threshold, label in PERFORMANCE_LEVELS:
        if note >= threshold:
            return _PERFORMANCE_COLORS[label]
    return "red"


def build_snapshot(
    attendances: Iterable[Any],
    participations: Iterable[Any],
    control_notes: Iterable[Any],
) -> PerformanceSnapshot:
    stats = attendance_stats(attendances)
    participation = participation_average(participations)
    control = control_note_average(control_notes)
    label = overall_performance(participation, control)
    return PerformanceSnapshot(
        attendance=stats,
        attendance_percentage=attendance_percentage(stats),
        participation_average=participation,
        control_note_average=control,
        overall_performance=label,
        performance_color=performance_color(label),
    )


def student_performance(session: Session, student_id: UUID) -> PerformanceSnapshot:
    """Load a student's records and compute the performance snapshot."""

    stmt = (
        select(Student)
        .options(
            selectinload(Student.attendances),
            selectinload(Student.participations),
            selectinload(Student.control_notes),
        )
        .where(Student.id == student_id)
    )
    student = session.execute(stmt).scalar_one_or_none()
    if student is None:
        raise PerformanceError(f"Student {student_id} not found", status_code=404)
    return build_snapshot(student.attendances, student.participations, student.control_notes)
