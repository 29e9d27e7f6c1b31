from .appointment_repository import AppointmentRepository
from .doctor_repository import DoctorRepository
from .patient_repository import AssignmentResult, PatientRepository
from .reference_repository import DiseaseRepository
from .storage import load_store, save_store
from .store import HospitalStore

__all__ = [
    "AppointmentRepository",
    "AssignmentResult",
    "DiseaseRepository",
    "DoctorRepository",
    "HospitalStore",
    "PatientRepository",
    "load_store",
    "save_store",
]
