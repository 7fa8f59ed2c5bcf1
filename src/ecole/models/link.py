"""One-time link codes binding a parent to a student."""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class StudentParentLink(Base):
    """A six-digit code a parent hands over so a student can be linked to them.

    ``is_used`` only ever moves from false to true.
    """

    __tablename__ = "link_student_parent"
    __table_args__ = (
        CheckConstraint("length(otp) = 6", name="link_student_parent_otp_length"),
        Index("link_student_parent_otp_idx", "otp"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    parent_id = Column(Uuid, ForeignKey("parents.id", ondelete="CASCADE"), nullable=False)
    otp = Column(String(6), nullable=False)
    is_used = Column(Boolean, nullable=False, default=False)
    expired_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    created_by = Column(Uuid)

    student = relationship("Student", back_populates="link_codes")
    parent = relationship("Parent")
