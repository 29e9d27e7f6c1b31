"""In-memory record store: four capped collections with their own id counters."""

from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

from .errors import (
    CapacityExceededError,
    RecordNotFoundError,
    UnknownAppointmentError,
    UnknownDoctorError,
    UnknownPatientError,
)
from .models import Appointment, Disease, Doctor, Patient

MAX_PATIENTS = 500
MAX_DISEASES = 200
MAX_DOCTORS = 100
MAX_APPOINTMENTS = 1000

T = TypeVar("T")


def names_match(a: str, b: str) -> bool:
    """Case-insensitive exact comparison of two names."""
    return a.lower() == b.lower()


class RecordCollection(Generic[T]):
    """Ordered records of one type plus the counter that hands out their ids.

    Ids start at 1 and are never reused: the counter only moves forward, even
    when records are deleted.
    """

    def __init__(
        self,
        name: str,
        capacity: int,
        records: list[T] | None = None,
        next_id: int = 1,
        not_found: type[RecordNotFoundError] = RecordNotFoundError,
    ):
        self.name = name
        self.capacity = capacity
        self.next_id = next_id
        self._records: list[T] = list(records or [])
        self._not_found = not_found

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self.capacity

    def add(self, record: T) -> int:
        """Assign the next id to the record and append it."""
        if self.is_full:
            raise CapacityExceededError(self.name, self.capacity)
        record.id = self.next_id
        self.next_id += 1
        self._records.append(record)
        return record.id

    def get_by_id(self, record_id: int) -> T | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def all(self) -> list[T]:
        """The live record list, in current order."""
        return self._records

    def delete_by_id(self, record_id: int) -> T:
        """Remove one record, keeping the relative order of the rest."""
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return self._records.pop(index)
        raise self._not_found(record_id)

    def find_by_name(self, name: str) -> list[T]:
        return [r for r in self._records if names_match(r.name, name)]

    def restore(self, records: list[T], next_id: int) -> None:
        """Replace contents wholesale, as when loading from disk."""
        self._records = list(records)
        self.next_id = next_id

    def sort_by_name(self) -> None:
        # list.sort is stable, so equal names keep their insertion order
        self._records.sort(key=lambda r: r.name.lower())


@dataclass
class HospitalStore:
    """All hospital records for one session."""
    patients: RecordCollection[Patient] = field(
        default_factory=lambda: RecordCollection("patients", MAX_PATIENTS, not_found=UnknownPatientError)
    )
    diseases: RecordCollection[Disease] = field(
        default_factory=lambda: RecordCollection("diseases", MAX_DISEASES)
    )
    doctors: RecordCollection[Doctor] = field(
        default_factory=lambda: RecordCollection("doctors", MAX_DOCTORS, not_found=UnknownDoctorError)
    )
    appointments: RecordCollection[Appointment] = field(
        default_factory=lambda: RecordCollection(
            "appointments", MAX_APPOINTMENTS, not_found=UnknownAppointmentError
        )
    )

    def collections(self) -> tuple[RecordCollection, ...]:
        """Collections in file order."""
        return (self.patients, self.diseases, self.doctors, self.appointments)

    def summary(self) -> dict[str, int]:
        return {c.name: len(c) for c in self.collections()}
