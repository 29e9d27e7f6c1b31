"""Seed the data file with mock doctors, disease references, patients and appointments."""

import sys
from pathlib import Path

from hospital_records.records import (
    AppointmentRepository,
    DiseaseRepository,
    DoctorRepository,
    HospitalStore,
    PatientRepository,
    save_store,
)


MOCK_DOCTORS = [
    {"name": "Dr. Emily Watson", "specialization": "Family Medicine", "phone": "555-1001"},
    {"name": "Dr. James Park", "specialization": "Cardiology", "phone": "555-1002"},
    {"name": "Dr. Lisa Hernandez", "specialization": "Orthopedics", "phone": "555-1003"},
    {"name": "Dr. Robert Kim", "specialization": "Dermatology", "phone": "555-1004"},
]

MOCK_DISEASES = [
    {
        "name": "Influenza",
        "symptoms": "Fever, cough, sore throat, body aches",
        "treatment": "Rest, fluids, antivirals if started early",
    },
    {
        "name": "Hypertension",
        "symptoms": "Often none; headaches when severe",
        "treatment": "Lifestyle changes, ACE inhibitors or diuretics",
    },
    {
        "name": "Eczema",
        "symptoms": "Itchy, dry, inflamed skin",
        "treatment": "Moisturizers, topical corticosteroids",
    },
]

# doctor is the 1-based position in MOCK_DOCTORS, or 0 for none
MOCK_PATIENTS = [
    {"name": "John Smith", "age": 39, "gender": "Male", "phone": "555-0101",
     "disease": "Back pain", "doctor": 3},
    {"name": "Sarah Johnson", "age": 32, "gender": "Female", "phone": "555-0102",
     "disease": "Influenza", "doctor": 1},
    {"name": "Michael Chen", "age": 46, "gender": "Male", "phone": "555-0103",
     "disease": "Hypertension", "doctor": 0},
    {"name": "Emma Davis", "age": 27, "gender": "Female", "phone": "555-0104",
     "disease": "Eczema", "doctor": 0},
]

# (patient position, doctor position, date, time), 1-based positions
MOCK_APPOINTMENTS = [
    (1, 3, "2026-11-02", "09:00"),
    (3, 2, "2026-11-03", "10:30"),
    (4, 4, "2026-11-05", "14:00"),
    (3, 1, "2026-11-10", "11:15"),
]


def seed(store: HospitalStore) -> HospitalStore:
    """Add the mock records to a store through the repositories."""
    doctors = [DoctorRepository(store).create(**d) for d in MOCK_DOCTORS]

    for d in MOCK_DISEASES:
        DiseaseRepository(store).create(**d)

    patient_repo = PatientRepository(store)
    patients = []
    for p in MOCK_PATIENTS:
        fields = {k: v for k, v in p.items() if k != "doctor"}
        patient = patient_repo.create(**fields)
        if p["doctor"]:
            patient_repo.assign_doctor(patient.id, doctors[p["doctor"] - 1].id)
        patients.append(patient)

    appointment_repo = AppointmentRepository(store)
    for patient_pos, doctor_pos, date, time in MOCK_APPOINTMENTS:
        appointment_repo.schedule(
            patients[patient_pos - 1].id, doctors[doctor_pos - 1].id, date, time
        )

    return store


def main(path: Path | None = None) -> None:
    store = seed(HospitalStore())
    saved_to = save_store(store, path)
    summary = ", ".join(f"{count} {name}" for name, count in store.summary().items())
    print(f"Seeded {saved_to}: {summary}")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
