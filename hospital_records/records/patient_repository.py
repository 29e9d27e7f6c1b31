"""Patient repository with intake, lookup, doctor assignment and deletion."""

import logging
from enum import Enum

from .errors import UnknownPatientError
from .models import NO_DOCTOR, Patient
from .store import HospitalStore

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"


class AssignmentResult(Enum):
    """Outcome of assigning a primary doctor to a patient."""
    ASSIGNED = "assigned"
    NONE = "none"
    UNKNOWN_DOCTOR = "unknown_doctor"


class PatientRepository:
    """Repository for patient operations over the in-memory store."""

    def __init__(self, store: HospitalStore):
        self.store = store

    def create(
        self,
        name: str,
        age: int,
        gender: str,
        phone: str,
        disease: str,
    ) -> Patient:
        """Register a new patient with no doctor assigned yet."""
        patient = Patient(
            id=0,
            name=name,
            age=age,
            gender=gender,
            phone=phone,
            disease=disease,
        )
        self.store.patients.add(patient)
        logger.info("Added patient %d (%s)", patient.id, patient.name)
        return patient

    def get_by_id(self, patient_id: int) -> Patient | None:
        """Get a patient by ID."""
        return self.store.patients.get_by_id(patient_id)

    def list_all(self) -> list[Patient]:
        return self.store.patients.all()

    def find_by_name(self, name: str) -> list[Patient]:
        """Find patients whose name matches exactly, ignoring case."""
        return self.store.patients.find_by_name(name)

    def assign_doctor(self, patient_id: int, doctor_id: int) -> AssignmentResult:
        """Set the patient's primary doctor.

        An unknown doctor id is not an error: the patient is left with no
        doctor and the caller is told so.
        """
        patient = self.get_by_id(patient_id)
        if patient is None:
            raise UnknownPatientError(patient_id)

        if doctor_id == NO_DOCTOR:
            patient.doctor_id = NO_DOCTOR
            return AssignmentResult.NONE

        if self.store.doctors.get_by_id(doctor_id) is None:
            patient.doctor_id = NO_DOCTOR
            logger.warning(
                "No doctor found with ID %d; patient %d left unassigned", doctor_id, patient_id
            )
            return AssignmentResult.UNKNOWN_DOCTOR

        patient.doctor_id = doctor_id
        logger.info("Assigned doctor %d to patient %d", doctor_id, patient_id)
        return AssignmentResult.ASSIGNED

    def delete(self, patient_id: int, confirmed: bool) -> Patient | None:
        """Delete a patient once the operator has confirmed.

        Returns the removed patient, or None when the operator declined.
        """
        if self.get_by_id(patient_id) is None:
            raise UnknownPatientError(patient_id)
        if not confirmed:
            return None

        patient = self.store.patients.delete_by_id(patient_id)
        logger.info("Deleted patient %d (%s)", patient.id, patient.name)
        return patient

    def sort_by_name(self) -> None:
        """Reorder patients by name, case-insensitively; ties keep their order."""
        self.store.patients.sort_by_name()

    def resolve_name(self, patient_id: int) -> str:
        patient = self.get_by_id(patient_id)
        return patient.name if patient else UNKNOWN_NAME
