"""Pydantic schemas for the student-parent linking flow."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class LinkStudentParentRequest(BaseModel):
    """Request body redeeming a parent's one-time code for a student."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student_id: UUID = Field(..., description="Student to link.")
    otp: str = Field(..., description="Six-digit code issued to the parent.")

    @field_validator("student_id", mode="before")
    @classmethod
    def check_student_id(cls, value):
        if value is None:
            raise PydanticCustomError("missing", "Il manque l'ID de l'élève à lier")
        if not isinstance(value, (str, UUID)):
            raise PydanticCustomError("uuid_type", "L'ID de l'élève à lier n'est pas valide")
        try:
            return UUID(str(value))
        except ValueError:
            raise PydanticCustomError("uuid_parsing", "L'ID de l'élève à lier n'est pas valide") from None

    @field_validator("otp", mode="before")
    @classmethod
    def check_otp(cls, value):
        if not isinstance(value, str):
            raise PydanticCustomError("string_type", "Le code OTP n'est pas valide")
        if len(value) != 6 or not value.isdigit():
            raise PydanticCustomError("otp_length", "Le code OTP doit contenir 6 chiffres")
        return value


class LinkResult(BaseModel):
    """Outcome of a redemption attempt."""

    success: bool
    message: str
