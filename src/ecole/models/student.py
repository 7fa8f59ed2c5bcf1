"""Student domain model."""

import enum
import uuid

from sqlalchemy import Column, Date, DateTime, Enum as SAEnum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class Gender(str, enum.Enum):
    """Recorded student gender."""

    M = "M"
    F = "F"


class Student(Base):
    """Represents a pupil enrolled in a school."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("school_id", "id_number", name="students_school_id_number_unique"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="SET NULL"))
    parent_id = Column(Uuid, ForeignKey("parents.id", ondelete="SET NULL"))
    id_number = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    date_of_birth = Column(Date)
    gender = Column(SAEnum(Gender, name="student_gender"), nullable=False)
    address = Column(String)
    avatar_url = Column(String)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    created_by = Column(Uuid)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
    updated_by = Column(Uuid)

    classroom = relationship("Classroom", back_populates="students")
    parent = relationship("Parent", back_populates="children")
    attendances = relationship("Attendance", back_populates="student", order_by="Attendance.date")
    participations = relationship("Participation", back_populates="student", order_by="Participation.date")
    control_notes = relationship("ControlNote", back_populates="student", order_by="ControlNote.date")
    link_codes = relationship("StudentParentLink", back_populates="student")

    @property
    def classroom_name(self):
        return self.classroom.name if self.classroom is not None else None
