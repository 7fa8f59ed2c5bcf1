"""Pydantic schemas for derived student analytics."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AttendanceStats(BaseModel):
    """Attendance counts by status."""

    present: int = Field(0, ge=0)
    absent: int = Field(0, ge=0)
    late: int = Field(0, ge=0)


class PerformanceSnapshot(BaseModel):
    """Computed on demand from a student's records; never stored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    attendance: AttendanceStats
    attendance_percentage: str
    participation_average: float
    control_note_average: Optional[float] = None
    overall_performance: str
    performance_color: str
