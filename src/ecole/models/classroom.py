"""Class (classroom group) model."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class Classroom(Base):
    """A class students are assigned to."""

    __tablename__ = "classes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid)
    grade_id = Column(Integer, ForeignKey("grades.id"))
    name = Column(String, nullable=False)
    description = Column(String)
    main_teacher_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=utc_now, nullable=False)
    created_by = Column(Uuid)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
    updated_by = Column(Uuid)

    students = relationship("Student", back_populates="classroom")
    main_teacher = relationship("User", back_populates="main_classes")
    grade = relationship("Grade", back_populates="classes")
