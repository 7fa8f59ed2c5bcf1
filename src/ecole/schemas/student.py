"""Pydantic schemas for student endpoints, imports and forms."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from ..models import Gender
from ..utils.formatting import format_full_name, format_phone_number

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ParentSummary(BaseModel):
    """Lightweight projection of a linked parent."""

    model_config = CAMEL_CONFIG

    id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone_number: Optional[str] = None

    @computed_field
    @property
    def display_name(self) -> str:
        return format_full_name(self.first_name, self.last_name, self.email)

    @computed_field
    @property
    def formatted_phone_number(self) -> Optional[str]:
        return format_phone_number(self.phone_number) if self.phone_number else None


class StudentRead(BaseModel):
    """Student response payload (camelCase on the wire)."""

    model_config = CAMEL_CONFIG

    id: UUID
    school_id: Optional[UUID] = None
    class_id: Optional[UUID] = None
    classroom_name: Optional[str] = None
    parent_id: Optional[UUID] = None
    id_number: str
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    gender: Gender
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentDetail(StudentRead):
    """Student with the linked parent."""

    parent: Optional[ParentSummary] = None


class StudentFilters(BaseModel):
    """Optional server-side filters of the student list."""

    name: Optional[str] = None
    id_number: Optional[str] = None
    class_id: Optional[UUID] = None
    school_id: Optional[UUID] = None
    age_min: Optional[int] = Field(None, ge=0)
    age_max: Optional[int] = Field(None, ge=0)


def _name_checker(label: str):
    def check(value: str) -> str:
        if len(value) < 2:
            raise PydanticCustomError("string_too_short", f"Le {label} ne peut pas être vide")
        if len(value) > 50:
            raise PydanticCustomError("string_too_long", f"Le {label} doit faire moins de 50 caractères")
        return value

    return check


FirstName = Annotated[str, AfterValidator(_name_checker("prénom"))]
LastName = Annotated[str, AfterValidator(_name_checker("nom"))]


class StudentCreate(BaseModel):
    """Request body for creating a student."""

    model_config = CAMEL_CONFIG

    id_number: str = Field(..., min_length=1)
    first_name: FirstName
    last_name: LastName
    gender: Gender
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    class_id: Optional[UUID] = None
    school_id: Optional[UUID] = None


class StudentUpdate(BaseModel):
    """Partial update of a student; at least one field must be provided."""

    model_config = CAMEL_CONFIG

    first_name: Optional[FirstName] = None
    last_name: Optional[LastName] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    class_id: Optional[UUID] = None
    school_id: Optional[UUID] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("gender", mode="before")
    @classmethod
    def check_gender(cls, value):
        if value is not None and value not in ("M", "F", Gender.M, Gender.F):
            raise PydanticCustomError("gender", 'Le genre doit être "Masculin" ou "Féminin"')
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "StudentUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("empty_update", "Il faut au moins un champ à mettre à jour")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class StudentImportRow(BaseModel):
    """One row of a student import file."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        str_strip_whitespace=True,
    )

    id_number: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    gender: Gender
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    class_id: Optional[UUID] = None


class StudentCreateForm(StudentCreate):
    """Form payload for the creation modal."""

    kind: Literal["create"] = "create"


class StudentUpdateForm(BaseModel):
    """Form payload for the editing modal."""

    model_config = CAMEL_CONFIG

    kind: Literal["update"] = "update"
    student_id: UUID
    changes: StudentUpdate


StudentFormPayload = Annotated[Union[StudentCreateForm, StudentUpdateForm], Field(discriminator="kind")]
