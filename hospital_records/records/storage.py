"""Save and load the whole record store to a single data file."""

import logging
import os
import struct
import tempfile
from pathlib import Path

from dotenv import load_dotenv

from .errors import CorruptDataError, StorageError
from .models import Appointment, Disease, Doctor, Patient
from .schema import (
    APPOINTMENT_FIELDS,
    DISEASE_FIELDS,
    DOCTOR_FIELDS,
    FORMAT_VERSION,
    HEADER,
    INT32,
    MAGIC,
    PATIENT_FIELDS,
    PREAMBLE,
    STR_LEN,
)
from .store import HospitalStore

load_dotenv(override=True)

logger = logging.getLogger(__name__)

DATA_PATH = Path(os.environ.get("HMS_DATA_FILE", "hospital_data.bin"))

# (record type, field layout) per collection, in file order
RECORD_LAYOUTS = (
    (Patient, PATIENT_FIELDS),
    (Disease, DISEASE_FIELDS),
    (Doctor, DOCTOR_FIELDS),
    (Appointment, APPOINTMENT_FIELDS),
)


class _Reader:
    """Cursor over the file bytes that refuses to read past the end."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def read(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise CorruptDataError(
                f"Data file truncated: needed {size} bytes at offset {self.pos}, "
                f"only {len(self.data) - self.pos} left"
            )
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.read(fmt.size))

    def read_str(self) -> str:
        (length,) = self.unpack(STR_LEN)
        raw = self.read(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"Invalid text at offset {self.pos - length}") from e

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos


def _encode_record(record, layout) -> bytes:
    parts = []
    for name, kind in layout:
        value = getattr(record, name)
        if kind == "i":
            parts.append(INT32.pack(value))
        else:
            raw = value.encode("utf-8")
            parts.append(STR_LEN.pack(len(raw)) + raw)
    return b"".join(parts)


def _decode_record(reader: _Reader, record_type, layout):
    values = {}
    for name, kind in layout:
        if kind == "i":
            (values[name],) = reader.unpack(INT32)
        else:
            values[name] = reader.read_str()
    return record_type(**values)


def _check_ids(name: str, records: list, next_id: int) -> None:
    """Loaded ids must be unique, positive and below the collection's counter."""
    seen = set()
    for record in records:
        if record.id < 1 or record.id >= next_id:
            raise CorruptDataError(
                f"Invalid {name} id {record.id} (next id is {next_id})"
            )
        if record.id in seen:
            raise CorruptDataError(f"Duplicate {name} id {record.id}")
        seen.add(record.id)


def set_aside(path: Path | None = None) -> Path:
    """Move an unreadable data file out of the way so a later save cannot clobber it."""
    path = Path(path or DATA_PATH)
    target = path.with_name(path.name + ".corrupt")
    try:
        os.replace(path, target)
    except OSError as e:
        raise StorageError(f"Could not move unreadable data file {path}: {e}") from e
    logger.warning("Moved unreadable data file %s to %s", path, target)
    return target


def encode_store(store: HospitalStore) -> bytes:
    """Serialize every collection and counter into the file format."""
    collections = store.collections()
    counts = [len(c) for c in collections]
    next_ids = [c.next_id for c in collections]

    try:
        chunks = [PREAMBLE.pack(MAGIC, FORMAT_VERSION), HEADER.pack(*counts, *next_ids)]
        for collection, (_, layout) in zip(collections, RECORD_LAYOUTS):
            for record in collection:
                chunks.append(_encode_record(record, layout))
    except struct.error as e:
        raise StorageError(f"Cannot encode record store: {e}") from e
    return b"".join(chunks)


def decode_store(data: bytes) -> HospitalStore:
    """Rebuild a store from file bytes, validating the layout as it goes."""
    reader = _Reader(data)

    magic, version = reader.unpack(PREAMBLE)
    if magic != MAGIC:
        raise CorruptDataError("Not a hospital data file")
    if version != FORMAT_VERSION:
        raise CorruptDataError(f"Unsupported data file version {version}")

    header = reader.unpack(HEADER)
    counts, next_ids = header[:4], header[4:]

    store = HospitalStore()
    for collection, count, next_id, (record_type, layout) in zip(
        store.collections(), counts, next_ids, RECORD_LAYOUTS
    ):
        if count < 0 or count > collection.capacity:
            raise CorruptDataError(
                f"Invalid {collection.name} count {count} (max {collection.capacity})"
            )
        if next_id < 1:
            raise CorruptDataError(f"Invalid next {collection.name} id {next_id}")
        records = [_decode_record(reader, record_type, layout) for _ in range(count)]
        _check_ids(collection.name, records, next_id)
        collection.restore(records, next_id)

    if reader.remaining:
        raise CorruptDataError(f"{reader.remaining} unexpected bytes after last record")
    return store


def save_store(store: HospitalStore, path: Path | None = None) -> Path:
    """Write the store to disk, replacing any previous file atomically."""
    path = Path(path or DATA_PATH)
    data = encode_store(store)

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"Could not write data file {path}: {e}") from e

    logger.info("Saved %s to %s", store.summary(), path)
    return path


def load_store(path: Path | None = None) -> HospitalStore:
    """Load the store from disk. A missing file means a fresh, empty store."""
    path = Path(path or DATA_PATH)
    if not path.exists():
        logger.info("No data file at %s, starting new database", path)
        return HospitalStore()

    try:
        data = path.read_bytes()
    except OSError as e:
        raise StorageError(f"Could not read data file {path}: {e}") from e

    store = decode_store(data)
    logger.info("Loaded %s from %s", store.summary(), path)
    return store
