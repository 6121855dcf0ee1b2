"""Exception hierarchy for the itinerary temporal core."""


class TripCoreError(Exception):
    """Base class for all tripcore errors."""


class MissingRequiredConfiguration(TripCoreError, ValueError):
    """A setting or input required for a data-mutating run is missing."""


class TemporalError(TripCoreError):
    """Base class for time-of-day and instant errors."""


class UnrecognizedTimeFormat(TemporalError, ValueError):
    """Time string matches neither HH:MM nor the 12-hour AM/PM form."""

    def __init__(self, value: str) -> None:
        super().__init__(f"unrecognized time format: {value!r}")
        self.value = value


class MalformedTimeOfDay(TemporalError, ValueError):
    """Time string cannot be read as a valid hour and minute."""

    def __init__(self, value: str, reason: str = "not a valid HH:MM clock reading") -> None:
        super().__init__(f"malformed time of day {value!r}: {reason}")
        self.value = value


class MigrationError(TripCoreError):
    """Base class for data migration failures."""


class UnknownRecord(MigrationError):
    """A migration referenced a record that does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class MigrationWriteFailure(MigrationError):
    """Writing a migrated record failed; the run is aborted."""

    def __init__(self, kind: str, record_id: int, reason: str) -> None:
        super().__init__(f"failed to update {kind} {record_id}: {reason}")
        self.kind = kind
        self.record_id = record_id
