"""Record types held by the hospital store."""

from dataclasses import dataclass

NO_DOCTOR = 0


@dataclass
class Patient:
    id: int
    name: str
    age: int
    gender: str
    phone: str
    disease: str
    doctor_id: int = NO_DOCTOR

    @property
    def has_doctor(self) -> bool:
        return self.doctor_id != NO_DOCTOR


@dataclass
class Doctor:
    id: int
    name: str
    specialization: str
    phone: str


@dataclass
class Disease:
    """Reference entry only; Patient.disease is free text, not a link to this."""
    id: int
    name: str
    symptoms: str
    treatment: str


@dataclass
class Appointment:
    id: int
    patient_id: int
    doctor_id: int
    date: str
    time: str
