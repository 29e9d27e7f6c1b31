"""Exceptions raised by the record store, repositories and storage layer."""


class RecordError(Exception):
    """Base class for all hospital record errors."""
    pass


class CapacityExceededError(RecordError):
    """Raised when a collection is already at its configured maximum."""

    def __init__(self, collection: str, capacity: int):
        self.collection = collection
        self.capacity = capacity
        super().__init__(f"Max {collection} reached ({capacity})")


class RecordNotFoundError(RecordError):
    """Raised when a mutation targets an id that does not exist."""

    kind = "record"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"No {self.kind} found with ID {record_id}")


class UnknownPatientError(RecordNotFoundError):
    kind = "patient"


class UnknownDoctorError(RecordNotFoundError):
    kind = "doctor"


class UnknownAppointmentError(RecordNotFoundError):
    kind = "appointment"


class InvalidInputError(RecordError):
    """Raised when operator input cannot be parsed."""
    pass


class StorageError(RecordError):
    """Raised when the data file cannot be read or written."""
    pass


class CorruptDataError(StorageError):
    """Raised when the data file exists but does not hold a valid database."""
    pass
