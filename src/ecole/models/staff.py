"""School staff accounts and grade levels referenced by classes."""

import uuid

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utc_now


class User(Base):
    """A director or teacher account; teachers can lead a class."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="users_email_unique"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid)
    first_name = Column(String)
    last_name = Column(String)
    email = Column(String, nullable=False)
    phone = Column(String)
    avatar_url = Column(String)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    main_classes = relationship("Classroom", back_populates="main_teacher")


class Grade(Base):
    """Grade level (e.g. 6ème) grouping the classes of a cycle."""

    __tablename__ = "grades"

    id = Column(Integer, primary_key=True)
    cycle_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utc_now, nullable=False)

    classes = relationship("Classroom", back_populates="grade")
