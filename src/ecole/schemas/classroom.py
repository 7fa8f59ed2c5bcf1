"""Pydantic schemas for class endpoints and forms."""

from __future__ import annotations

from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..utils.formatting import format_full_name

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _check_class_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError("string_too_short", "Le nom de la classe ne peut pas être vide")
    if len(value) > 50:
        raise PydanticCustomError("string_too_long", "Le nom de la classe doit faire moins de 50 caractères")
    return value


ClassName = Annotated[str, AfterValidator(_check_class_name)]


class ClassRead(BaseModel):
    """Class list entry with its main teacher and head count."""

    model_config = CAMEL_CONFIG

    id: UUID
    name: str
    description: Optional[str] = None
    grade_id: Optional[int] = None
    school_id: Optional[UUID] = None
    main_teacher_id: Optional[UUID] = None
    main_teacher_name: Optional[str] = None
    student_count: int = 0

    @classmethod
    def from_row(cls, classroom, student_count: Optional[int] = 0) -> "ClassRead":
        teacher = classroom.main_teacher
        return cls(
            id=classroom.id,
            name=classroom.name,
            description=classroom.description,
            grade_id=classroom.grade_id,
            school_id=classroom.school_id,
            main_teacher_id=classroom.main_teacher_id,
            main_teacher_name=(
                format_full_name(teacher.first_name, teacher.last_name, teacher.email) if teacher else None
            ),
            student_count=student_count or 0,
        )


class ClassFilters(BaseModel):
    name: Optional[str] = None
    grade_id: Optional[int] = None
    school_id: Optional[UUID] = None


class ClassCreate(BaseModel):
    """Request body for creating a class."""

    model_config = CAMEL_CONFIG

    name: ClassName
    description: Optional[str] = None
    grade_id: Optional[int] = None
    school_id: Optional[UUID] = None
    main_teacher_id: Optional[UUID] = None


class ClassUpdate(BaseModel):
    """Partial update of a class; at least one field must be provided."""

    model_config = CAMEL_CONFIG

    name: Optional[ClassName] = None
    description: Optional[str] = None
    grade_id: Optional[int] = None
    main_teacher_id: Optional[UUID] = None

    @model_validator(mode="after")
    def require_one_field(self) -> "ClassUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("empty_update", "Il faut au moins un champ à mettre à jour")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SubclassSummary(BaseModel):
    id: UUID
    name: str


class GradeGroup(BaseModel):
    """Classes of one grade level, with the number of students they hold."""

    id: str
    name: str
    count: int = Field(0, ge=0)
    subclasses: List[SubclassSummary]
