"""Doctor repository. Doctors are append-only: no edits, no deletion."""

import logging

from .models import Doctor
from .patient_repository import UNKNOWN_NAME
from .store import HospitalStore

logger = logging.getLogger(__name__)


class DoctorRepository:
    """Repository for doctor registration and lookups."""

    def __init__(self, store: HospitalStore):
        self.store = store

    def create(self, name: str, specialization: str, phone: str) -> Doctor:
        """Register a new doctor."""
        doctor = Doctor(id=0, name=name, specialization=specialization, phone=phone)
        self.store.doctors.add(doctor)
        logger.info("Added doctor %d (%s)", doctor.id, doctor.name)
        return doctor

    def get_by_id(self, doctor_id: int) -> Doctor | None:
        return self.store.doctors.get_by_id(doctor_id)

    def list_all(self) -> list[Doctor]:
        return self.store.doctors.all()

    def resolve_name(self, doctor_id: int) -> str:
        """Doctor name for display, or a placeholder when the id is unknown."""
        doctor = self.get_by_id(doctor_id)
        return doctor.name if doctor else UNKNOWN_NAME
