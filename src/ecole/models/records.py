"""Attendance, participation and control note records."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum as SAEnum, Float, ForeignKey, String, Time, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class AttendanceStatus(str, enum.Enum):
    """Attendance outcome of one lesson."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"


class Attendance(Base):
    """Presence of a student during one lesson slot."""

    __tablename__ = "attendances"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="CASCADE"))
    date = Column(Date, nullable=False)
    from_time = Column("from", Time)
    to_time = Column("to", Time)
    status = Column(
        SAEnum(AttendanceStatus, name="attendance_status", values_callable=lambda kinds: [kind.value for kind in kinds]),
        nullable=False,
    )
    created_at = Column(DateTime, default=utc_now, nullable=False)

    student = relationship("Student", back_populates="attendances")


class Participation(Base):
    """Oral participation mark, out of 20."""

    __tablename__ = "participations"
    __table_args__ = (CheckConstraint("note >= 0 AND note <= 20", name="participations_note_range"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="CASCADE"))
    subject_name = Column(String)
    note = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    student = relationship("Student", back_populates="participations")


class ControlNote(Base):
    """Written test mark, out of 20."""

    __tablename__ = "control_notes"
    __table_args__ = (CheckConstraint("note >= 0 AND note <= 20", name="control_notes_note_range"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="CASCADE"))
    teacher_id = Column(Uuid)
    subject_name = Column(String)
    note = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    student = relationship("Student", back_populates="control_notes")
