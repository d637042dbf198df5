"""Custom exceptions for loadwatch."""


class LoadwatchError(Exception):
    """Base exception for all loadwatch errors."""

    pass


class ConfigurationError(LoadwatchError):
    """Error in configuration or settings."""

    pass


class RecordValidationError(LoadwatchError):
    """A workload record could not be interpreted."""

    pass


class DuplicateRecordError(RecordValidationError):
    """Two or more records share a date and the merge policy rejects them.

    Attributes:
        dates: The duplicated dates, ascending.
    """

    def __init__(self, message: str, dates: list):
        super().__init__(message)
        self.dates = dates

    def __str__(self) -> str:
        shown = ", ".join(d.isoformat() for d in self.dates[:5])
        more = f" (+{len(self.dates) - 5} more)" if len(self.dates) > 5 else ""
        return f"DuplicateRecordError: {self.args[0]} [{shown}{more}]"
