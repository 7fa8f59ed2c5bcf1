"""SQLAlchemy models for the École service."""

from .classroom import Classroom
from .link import StudentParentLink
from .parent import Parent
from .records import Attendance, AttendanceStatus, ControlNote, Participation
from .staff import Grade, User
from .student import Gender, Student

__all__ = [
    "Attendance",
    "AttendanceStatus",
    "Classroom",
    "ControlNote",
    "Gender",
    "Grade",
    "Parent",
    "Participation",
    "Student",
    "StudentParentLink",
    "User",
]
