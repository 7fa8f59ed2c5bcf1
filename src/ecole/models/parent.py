"""Parent account model."""

import uuid

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class Parent(Base):
    """A parent or guardian who can be linked to students."""

    __tablename__ = "parents"
    __table_args__ = (UniqueConstraint("email", name="parents_email_unique"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String)
    last_name = Column(String)
    email = Column(String, nullable=False)
    phone_number = Column(String)
    avatar_url = Column(String)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    children = relationship("Student", back_populates="parent")
