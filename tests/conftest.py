"""Shared pytest fixtures."""

import pytest
from unittest.mock import patch

from hospital_records.records import (
    AppointmentRepository,
    DiseaseRepository,
    DoctorRepository,
    HospitalStore,
    PatientRepository,
)


@pytest.fixture
def store():
    """A fresh, empty store."""
    return HospitalStore()


@pytest.fixture
def data_file(tmp_path):
    """Path for a data file inside the test's temp directory."""
    return tmp_path / "hospital_data.bin"


@pytest.fixture
def patient_repo(store):
    return PatientRepository(store)


@pytest.fixture
def doctor_repo(store):
    return DoctorRepository(store)


@pytest.fixture
def disease_repo(store):
    return DiseaseRepository(store)


@pytest.fixture
def appointment_repo(store):
    return AppointmentRepository(store)


@pytest.fixture
def test_doctor(doctor_repo):
    return doctor_repo.create(name="Dr. Test", specialization="Family Medicine", phone="555-DOC")


@pytest.fixture
def test_patient(patient_repo):
    return patient_repo.create(
        name="Test Fixture",
        age=40,
        gender="Female",
        phone="555-FIXTURE",
        disease="Migraine",
    )


@pytest.fixture
def mock_console():
    """Replace the console so prompts read from a scripted list of replies."""
    with patch("hospital_records.main.console") as console:
        yield console


@pytest.fixture
def printed(mock_console):
    """Everything printed to the mocked console, as one string."""
    def _printed() -> str:
        return "\n".join(
            str(call.args[0]) for call in mock_console.print.call_args_list if call.args
        )
    return _printed
