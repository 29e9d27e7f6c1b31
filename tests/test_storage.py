"""Tests for saving and loading the data file."""

import struct

import pytest

from hospital_records.records.errors import CorruptDataError, StorageError
from hospital_records.records.models import Doctor, Patient
from hospital_records.records.schema import FORMAT_VERSION, HEADER, MAGIC, PREAMBLE
from hospital_records.records.storage import (
    decode_store,
    encode_store,
    load_store,
    save_store,
    set_aside,
)
from hospital_records.records.store import HospitalStore
from hospital_records.scripts.seed_records import seed


@pytest.fixture
def seeded_store():
    store = seed(HospitalStore())
    # Leave gaps in the id space so counters differ from counts
    store.patients.delete_by_id(2)
    store.appointments.delete_by_id(1)
    return store


def assert_same_store(a: HospitalStore, b: HospitalStore):
    for left, right in zip(a.collections(), b.collections()):
        assert left.name == right.name
        assert left.all() == right.all()
        assert left.next_id == right.next_id


class TestRoundTrip:
    """save followed by load reproduces the store."""

    def test_round_trip_file(self, seeded_store, data_file):
        save_store(seeded_store, data_file)
        loaded = load_store(data_file)
        assert_same_store(seeded_store, loaded)

    def test_round_trip_empty_store(self, data_file):
        save_store(HospitalStore(), data_file)
        loaded = load_store(data_file)
        assert loaded.summary() == {"patients": 0, "diseases": 0, "doctors": 0, "appointments": 0}
        assert all(c.next_id == 1 for c in loaded.collections())

    def test_round_trip_unicode_text(self, store, patient_repo, data_file):
        patient_repo.create(name="Zoë Müller", age=-1, gender="", phone="", disease="Grippe ü")
        save_store(store, data_file)
        loaded = load_store(data_file)
        assert loaded.patients.all()[0].name == "Zoë Müller"
        assert loaded.patients.all()[0].age == -1

    def test_counters_survive_round_trip(self, seeded_store, data_file):
        save_store(seeded_store, data_file)
        loaded = load_store(data_file)
        new_id = loaded.patients.add(
            Patient(id=0, name="New", age=1, gender="", phone="", disease="")
        )
        assert new_id == seeded_store.patients.next_id

    def test_save_overwrites_existing_file(self, seeded_store, data_file):
        save_store(seeded_store, data_file)
        save_store(HospitalStore(), data_file)
        assert load_store(data_file).summary()["patients"] == 0

    def test_save_leaves_no_temp_files(self, seeded_store, data_file):
        save_store(seeded_store, data_file)
        assert [p.name for p in data_file.parent.iterdir()] == [data_file.name]


class TestFileFormat:
    """Tests for the versioned, big-endian layout."""

    def test_preamble_and_header(self, seeded_store):
        data = encode_store(seeded_store)
        magic, version = PREAMBLE.unpack_from(data)
        header = HEADER.unpack_from(data, PREAMBLE.size)

        assert magic == MAGIC
        assert version == FORMAT_VERSION
        assert header[:4] == tuple(len(c) for c in seeded_store.collections())
        assert header[4:] == tuple(c.next_id for c in seeded_store.collections())

    def test_empty_store_size(self):
        data = encode_store(HospitalStore())
        assert len(data) == PREAMBLE.size + HEADER.size


class TestLoadFailures:
    """Tests for missing, corrupt and unreadable files."""

    def test_missing_file_gives_empty_store(self, data_file):
        store = load_store(data_file)
        assert store.summary()["patients"] == 0
        assert store.patients.next_id == 1

    @pytest.mark.parametrize("keep", [0, 3, 10, 40])
    def test_truncated_data(self, seeded_store, keep):
        data = encode_store(seeded_store)
        with pytest.raises(CorruptDataError):
            decode_store(data[:keep])

    def test_truncated_last_record(self, seeded_store, data_file):
        data = encode_store(seeded_store)
        data_file.write_bytes(data[:-1])
        with pytest.raises(CorruptDataError):
            load_store(data_file)

    def test_bad_magic(self, seeded_store):
        data = encode_store(seeded_store)
        with pytest.raises(CorruptDataError, match="Not a hospital data file"):
            decode_store(b"XXXX" + data[4:])

    def test_unsupported_version(self, seeded_store):
        data = encode_store(seeded_store)
        bumped = PREAMBLE.pack(MAGIC, FORMAT_VERSION + 1) + data[PREAMBLE.size:]
        with pytest.raises(CorruptDataError, match="version"):
            decode_store(bumped)

    def test_trailing_bytes(self, seeded_store):
        with pytest.raises(CorruptDataError, match="unexpected bytes"):
            decode_store(encode_store(seeded_store) + b"\x00")

    def test_count_over_capacity(self):
        data = PREAMBLE.pack(MAGIC, FORMAT_VERSION) + HEADER.pack(501, 0, 0, 0, 1, 1, 1, 1)
        with pytest.raises(CorruptDataError, match="patients count"):
            decode_store(data)

    def test_negative_count(self):
        data = PREAMBLE.pack(MAGIC, FORMAT_VERSION) + HEADER.pack(0, -1, 0, 0, 1, 1, 1, 1)
        with pytest.raises(CorruptDataError):
            decode_store(data)

    def test_invalid_utf8(self):
        bad_patient = (
            struct.pack(">i", 1)
            + struct.pack(">I", 1) + b"\xff"
        )
        data = (
            PREAMBLE.pack(MAGIC, FORMAT_VERSION)
            + HEADER.pack(1, 0, 0, 0, 2, 1, 1, 1)
            + bad_patient
        )
        with pytest.raises(CorruptDataError, match="Invalid text"):
            decode_store(data)

    def test_rewound_counter_rejected(self, store, patient_repo):
        for name in ("A", "B", "C"):
            patient_repo.create(name=name, age=1, gender="", phone="", disease="")
        data = bytearray(encode_store(store))
        # next patient id is the fifth header field
        struct.pack_into(">i", data, PREAMBLE.size + 4 * 4, 1)

        with pytest.raises(CorruptDataError, match="Invalid patients id"):
            decode_store(bytes(data))

    def test_duplicate_ids_rejected(self, store):
        store.patients.restore(
            [
                Patient(id=1, name="A", age=1, gender="", phone="", disease=""),
                Patient(id=1, name="B", age=1, gender="", phone="", disease=""),
            ],
            next_id=3,
        )
        with pytest.raises(CorruptDataError, match="Duplicate patients id 1"):
            decode_store(encode_store(store))

    def test_non_positive_id_rejected(self, store):
        store.doctors.restore(
            [Doctor(id=0, name="Dr. Zero", specialization="", phone="")], next_id=2
        )
        with pytest.raises(CorruptDataError, match="Invalid doctors id 0"):
            decode_store(encode_store(store))

    def test_corrupt_error_is_storage_error(self):
        with pytest.raises(StorageError):
            decode_store(b"")

    def test_save_to_missing_directory(self, seeded_store, tmp_path):
        with pytest.raises(StorageError):
            save_store(seeded_store, tmp_path / "missing" / "data.bin")


class TestSetAside:
    """Tests for moving an unreadable data file out of the way."""

    def test_moves_file_with_contents(self, data_file):
        data_file.write_bytes(b"HMSD\x00")

        target = set_aside(data_file)

        assert target == data_file.with_name("hospital_data.bin.corrupt")
        assert target.read_bytes() == b"HMSD\x00"
        assert not data_file.exists()

    def test_missing_file(self, data_file):
        with pytest.raises(StorageError, match="Could not move"):
            set_aside(data_file)
