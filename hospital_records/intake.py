"""Operator input parsing and validation using Pydantic models."""

import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from hospital_records.records.errors import InvalidInputError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Longest text kept per field; longer input is cut to fit.
FIELD_WIDTHS = {
    "name": 99,
    "gender": 9,
    "phone": 19,
    "disease": 99,
    "specialization": 99,
    "symptoms": 199,
    "treatment": 199,
    "date": 19,
    "time": 9,
}


def parse_int(text: str) -> int:
    """Parse a whole line as a base-10 integer in the signed 32-bit range."""
    # Leading blanks are skipped; anything after the digits is rejected
    text = text.lstrip()
    if not text:
        raise InvalidInputError("Invalid input. Please enter a number.")
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidInputError("Invalid input. Please enter only a number.")
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        raise InvalidInputError("Number is out of range.")
    return value


def is_confirmed(text: str) -> bool:
    """A reply counts as yes when its first character is 'y' or 'Y'."""
    return text[:1] in ("y", "Y")


class _TextIntake(BaseModel):
    """Strips text fields and truncates them to their stored width."""

    @field_validator("*", mode="before")
    @classmethod
    def clean_text(cls, v, info: ValidationInfo):
        if not isinstance(v, str):
            return v
        v = v.strip()
        width = FIELD_WIDTHS.get(info.field_name)
        return v[:width] if width else v


class PatientIntake(_TextIntake):
    """Everything collected when registering a patient."""
    name: str = Field(..., description="Patient's full name")
    age: int = Field(..., ge=INT32_MIN, le=INT32_MAX)
    gender: str = ""
    phone: str = ""
    disease: str = Field("", description="Disease or condition, free text")


class DoctorIntake(_TextIntake):
    name: str = Field(..., description="Doctor name, e.g. Dr. Smith")
    specialization: str = ""
    phone: str = ""


class DiseaseIntake(_TextIntake):
    name: str
    symptoms: str = ""
    treatment: str = ""


class AppointmentRequest(_TextIntake):
    patient_id: int
    doctor_id: int
    date: str = Field("", description="YYYY-MM-DD, not validated")
    time: str = Field("", description="HH:MM, not validated")
