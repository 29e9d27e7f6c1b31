"""Appointment repository with scheduling, cancellation and display lookups."""

import logging

from .errors import (
    CapacityExceededError,
    UnknownAppointmentError,
    UnknownDoctorError,
    UnknownPatientError,
)
from .models import NO_DOCTOR, Appointment
from .patient_repository import UNKNOWN_NAME
from .store import HospitalStore

logger = logging.getLogger(__name__)


class AppointmentRepository:
    """Repository for appointment operations."""

    def __init__(self, store: HospitalStore):
        self.store = store

    def schedule(self, patient_id: int, doctor_id: int, date: str, time: str) -> Appointment:
        """Book an appointment between an existing patient and doctor.

        If the patient has no primary doctor yet, the appointment's doctor
        becomes their primary doctor. An existing assignment is never replaced.
        """
        appointments = self.store.appointments
        if appointments.is_full:
            raise CapacityExceededError(appointments.name, appointments.capacity)

        patient = self.store.patients.get_by_id(patient_id)
        if patient is None:
            raise UnknownPatientError(patient_id)
        if self.store.doctors.get_by_id(doctor_id) is None:
            raise UnknownDoctorError(doctor_id)

        appointment = Appointment(
            id=0,
            patient_id=patient_id,
            doctor_id=doctor_id,
            date=date,
            time=time,
        )
        appointments.add(appointment)
        logger.info(
            "Scheduled appointment %d: patient %d with doctor %d on %s %s",
            appointment.id, patient_id, doctor_id, date, time,
        )

        if patient.doctor_id == NO_DOCTOR:
            patient.doctor_id = doctor_id
            logger.info("Doctor %d set as primary doctor for patient %d", doctor_id, patient_id)

        return appointment

    def get_by_id(self, appointment_id: int) -> Appointment | None:
        return self.store.appointments.get_by_id(appointment_id)

    def list_all(self) -> list[Appointment]:
        return self.store.appointments.all()

    def list_for_patient(self, patient_id: int) -> list[Appointment]:
        return [a for a in self.store.appointments if a.patient_id == patient_id]

    def cancel(self, appointment_id: int, confirmed: bool) -> Appointment | None:
        """Cancel an appointment once confirmed; None when the operator declined."""
        if self.get_by_id(appointment_id) is None:
            raise UnknownAppointmentError(appointment_id)
        if not confirmed:
            return None

        appointment = self.store.appointments.delete_by_id(appointment_id)
        logger.info("Cancelled appointment %d", appointment.id)
        return appointment

    def describe(self, appointment: Appointment) -> dict:
        """Appointment details with patient and doctor names resolved for display."""
        patient = self.store.patients.get_by_id(appointment.patient_id)
        doctor = self.store.doctors.get_by_id(appointment.doctor_id)
        return {
            "id": appointment.id,
            "patient_id": appointment.patient_id,
            "patient": patient.name if patient else UNKNOWN_NAME,
            "doctor_id": appointment.doctor_id,
            "doctor": doctor.name if doctor else UNKNOWN_NAME,
            "date": appointment.date,
            "time": appointment.time,
        }
