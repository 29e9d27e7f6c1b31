"""Tests for operator input parsing and intake models."""

import pytest
from pydantic import ValidationError

from hospital_records.intake import (
    INT32_MAX,
    INT32_MIN,
    AppointmentRequest,
    DiseaseIntake,
    DoctorIntake,
    PatientIntake,
    is_confirmed,
    parse_int,
)
from hospital_records.records.errors import InvalidInputError


class TestParseInt:
    @pytest.mark.parametrize("text,expected", [
        ("42", 42),
        ("  7", 7),
        ("-3", -3),
        ("+5", 5),
        ("0", 0),
        (str(INT32_MAX), INT32_MAX),
        (str(INT32_MIN), INT32_MIN),
    ])
    def test_valid(self, text, expected):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12abc", "1.5", "1_000", "0x10", "7 ", "12\n", "\u0661\u0662"])
    def test_invalid(self, text):
        with pytest.raises(InvalidInputError):
            parse_int(text)

    @pytest.mark.parametrize("text", [str(INT32_MAX + 1), str(INT32_MIN - 1), "99999999999999999999"])
    def test_out_of_range(self, text):
        with pytest.raises(InvalidInputError, match="out of range"):
            parse_int(text)


class TestIsConfirmed:
    @pytest.mark.parametrize("reply", ["y", "Y", "yes", "Yep"])
    def test_yes(self, reply):
        assert is_confirmed(reply)

    @pytest.mark.parametrize("reply", ["", "n", "no", "sure", "1", " y"])
    def test_no(self, reply):
        assert not is_confirmed(reply)


class TestIntakeModels:
    def test_patient_fields_stripped(self):
        intake = PatientIntake(
            name="  Jane Doe ", age=30, gender=" F ", phone="555", disease=" Flu "
        )
        assert intake.name == "Jane Doe"
        assert intake.gender == "F"
        assert intake.disease == "Flu"

    def test_patient_fields_truncated(self):
        intake = PatientIntake(
            name="x" * 150, age=30, gender="nonbinary-ish", phone="1" * 25, disease="d" * 120
        )
        assert len(intake.name) == 99
        assert intake.gender == "nonbinary"
        assert len(intake.phone) == 19
        assert len(intake.disease) == 99

    def test_patient_age_must_be_int(self):
        with pytest.raises(ValidationError):
            PatientIntake(name="Jane", age="old")

    def test_model_dump_matches_repository_arguments(self):
        intake = PatientIntake(name="Jane", age=30)
        assert intake.model_dump() == {
            "name": "Jane", "age": 30, "gender": "", "phone": "", "disease": "",
        }

    def test_doctor_and_disease_widths(self):
        doctor = DoctorIntake(name="Dr. A", specialization="s" * 120, phone="555")
        disease = DiseaseIntake(name="Flu", symptoms="s" * 300, treatment="t" * 300)
        assert len(doctor.specialization) == 99
        assert len(disease.symptoms) == 199
        assert len(disease.treatment) == 199

    def test_appointment_date_time_not_validated(self):
        request = AppointmentRequest(patient_id=1, doctor_id=2, date="next tuesday", time="9am")
        assert request.date == "next tuesday"
        assert request.time == "9am"

    def test_appointment_time_truncated(self):
        request = AppointmentRequest(patient_id=1, doctor_id=2, date="2026-11-02", time="09:30:00:00")
        assert request.time == "09:30:00:"
